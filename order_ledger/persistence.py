"""
Persistence Gateways
Load/save contract for ledger snapshots, with in-memory and JSON file adapters.
"""

import contextlib
import copy
import json
import logging
import os
import warnings

from .config import STORAGE_FILE
from .errors import PersistenceWarning

logger = logging.getLogger(__name__)


def report_failure(log, msg, *args):
    """Log a save/load failure and issue it as a PersistenceWarning"""
    log.warning(msg, *args)
    warnings.warn(msg % args, PersistenceWarning, stacklevel=3)


class PersistenceGateway:
    """Snapshot store used by the ledger.

    load() returns a list of plain dicts (newest-first) or None when nothing
    has been saved. save() returns nothing; failures are logged, not raised.
    """

    def load(self):
        raise NotImplementedError

    def save(self, snapshot):
        raise NotImplementedError


class MemoryGateway(PersistenceGateway):
    """Keeps a private copy of the last saved snapshot"""

    def __init__(self, snapshot=None):
        self._snapshot = copy.deepcopy(snapshot) if snapshot is not None else None
        self.save_count = 0

    def load(self):
        return copy.deepcopy(self._snapshot) if self._snapshot is not None else None

    def save(self, snapshot):
        self._snapshot = copy.deepcopy(list(snapshot))
        self.save_count += 1


class JsonFileGateway(PersistenceGateway):
    """Stores the snapshot as a UTF-8 JSON array in a single file"""

    def __init__(self, path=STORAGE_FILE):
        self.path = path

    def load(self):
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            report_failure(logger, "Failed to read orders from %s: %s", self.path, e)
            return None
        if not isinstance(data, list):
            report_failure(logger, "Ignoring %s: expected a list of orders, got %s",
                           self.path, type(data).__name__)
            return None
        return [row for row in data if isinstance(row, dict)]

    def save(self, snapshot):
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(list(snapshot), fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            report_failure(logger, "Failed to save orders to %s: %s", self.path, e)
            with contextlib.suppress(OSError):
                os.remove(tmp_path)
