"""
Shared fixtures for ledger, query and layout tests.
"""

import itertools
from datetime import date

import pytest

from order_ledger.ledger import Ledger
from order_ledger.models import OrderFormData
from order_ledger.persistence import MemoryGateway


class LineBreakMeasurer:
    """Wraps only at explicit newlines, so tests control the line count"""

    def __init__(self):
        self.calls = []

    def measure_wrapped_lines(self, content, max_width, style=None):
        self.calls.append((content, max_width))
        return content.split("\n")


class FailingGateway:
    def __init__(self):
        self.attempts = 0

    def load(self):
        raise OSError("storage unavailable")

    def save(self, snapshot):
        self.attempts += 1
        raise OSError("disk full")


def counter_ids(prefix="ord"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


def make_form(client="Cliente", description="Fita jacquard", section="Jacquard", **kwargs):
    kwargs.setdefault("created_date", date(2026, 10, 1))
    return OrderFormData(description=description, client_name=client, section=section, **kwargs)


@pytest.fixture
def gateway():
    return MemoryGateway()


@pytest.fixture
def ledger(gateway):
    return Ledger(gateway, id_factory=counter_ids())


@pytest.fixture
def abc_ledger(ledger):
    """Clients A, B, C added in that order"""
    for client in ("A", "B", "C"):
        ledger.add(make_form(client=client))
    return ledger


@pytest.fixture
def measurer():
    return LineBreakMeasurer()
