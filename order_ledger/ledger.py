"""
Order Ledger
The authoritative newest-first collection of order records.
"""

import logging
import uuid
from dataclasses import replace
from datetime import date

from .errors import NotFoundError
from .models import OrderStatus, OrderRecord, validate_form, record_to_dict, record_from_dict
from .persistence import MemoryGateway, report_failure

logger = logging.getLogger(__name__)


def _new_id():
    return str(uuid.uuid4())


class Ledger:
    """Owns the order records and keeps their sequence numbers dense.

    Records are held newest-first. Sequence numbers are never counted up;
    they are recomputed from position after every structural change, so the
    record at index i always carries len(ledger) - i.
    """

    def __init__(self, gateway=None, id_factory=_new_id):
        self.gateway = gateway if gateway is not None else MemoryGateway()
        self._id_factory = id_factory
        self._records = []
        self._issued_ids = set()

    # ─── READ ───

    @property
    def records(self):
        return tuple(self._records)

    def __len__(self):
        return len(self._records)

    def __iter__(self):
        return iter(tuple(self._records))

    def get(self, record_id) -> OrderRecord:
        return self._records[self._index_of(record_id)]

    def snapshot(self):
        return [record_to_dict(r) for r in self._records]

    # ─── MUTATIONS ───

    def add(self, form) -> OrderRecord:
        form = validate_form(form)
        record = OrderRecord(
            id=self._issue_id(),
            sequence_number=len(self._records) + 1,
            created_date=form.created_date,
            description=form.description,
            client_name=form.client_name,
            section=form.section,
            quantity=form.quantity,
            commercial_agent=form.commercial_agent,
            is_eco_flagged=form.is_eco_flagged,
            status=OrderStatus.PENDING,
        )
        self._records.insert(0, record)
        logger.debug("Added order %s as nº %d", record.id, record.sequence_number)
        self.persist()
        return record

    def remove(self, record_id):
        index = self._index_of(record_id)
        del self._records[index]
        self._renumber()
        logger.debug("Removed order %s; %d remaining", record_id, len(self._records))
        self.persist()

    def set_status(self, record_id, status) -> OrderRecord:
        status = OrderStatus.parse(status)
        index = self._index_of(record_id)
        record = replace(self._records[index], status=status)
        self._records[index] = record
        logger.debug("Order %s status -> %s", record_id, status.value)
        self.persist()
        return record

    def replace(self, record_id, form) -> OrderRecord:
        """Replace the free-text fields of a record, keeping identity and status"""
        form = validate_form(form)
        index = self._index_of(record_id)
        record = replace(
            self._records[index],
            description=form.description,
            client_name=form.client_name,
            section=form.section,
            quantity=form.quantity,
            commercial_agent=form.commercial_agent,
            is_eco_flagged=form.is_eco_flagged,
        )
        self._records[index] = record
        self.persist()
        return record

    # ─── PERSISTENCE ───

    def load(self):
        """Replace the ledger contents with the gateway's snapshot"""
        try:
            snapshot = self.gateway.load()
        except Exception as e:
            report_failure(logger, "Failed to load orders: %s", e)
            snapshot = None
        self.load_from(snapshot or [])

    def load_from(self, snapshot, today=None):
        today = today or date.today()
        records = []
        seen = set()
        for row in snapshot:
            if not isinstance(row, dict):
                logger.warning("Skipping unreadable order row: %r", row)
                continue
            record = record_from_dict(row, today)
            if not record.id or record.id in seen:
                new_id = self._issue_id(reserved=seen)
                logger.warning("Order %r has a missing or duplicate id; assigned %s", record.id, new_id)
                record = replace(record, id=new_id)
            seen.add(record.id)
            records.append(record)
        self._issued_ids.update(seen)
        self._records = records
        self._renumber()

    def persist(self):
        try:
            self.gateway.save(self.snapshot())
        except Exception as e:
            report_failure(logger, "Failed to persist orders: %s", e)

    # ─── INTERNALS ───

    def _index_of(self, record_id):
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        raise NotFoundError(record_id)

    def _issue_id(self, reserved=()):
        while True:
            candidate = str(self._id_factory())
            if candidate and candidate not in self._issued_ids and candidate not in reserved:
                self._issued_ids.add(candidate)
                return candidate

    def _renumber(self):
        total = len(self._records)
        self._records = [
            r if r.sequence_number == total - i else replace(r, sequence_number=total - i)
            for i, r in enumerate(self._records)
        ]
