"""
Order Records
Entity, status enumeration, form input and the snapshot row format.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .errors import ValidationError

logger = logging.getLogger(__name__)


class OrderStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def label(self):
        return STATUS_LABELS[self]

    @classmethod
    def parse(cls, value):
        """Accept a member, its value, its name or the camel-case name"""
        if isinstance(value, cls):
            return value
        key = str(value).strip().replace("-", "_").replace(" ", "_").lower()
        for status in cls:
            if key in (status.value, status.value.replace("_", "")):
                return status
        raise ValueError(f"Unknown order status: {value!r}")


STATUS_LABELS = {
    OrderStatus.PENDING: "Pendente",
    OrderStatus.IN_PROGRESS: "Em curso",
    OrderStatus.COMPLETED: "Concluída",
    OrderStatus.CANCELLED: "Cancelada",
}


@dataclass
class OrderFormData:
    """Raw input from the order form"""
    description: str = ""
    client_name: str = ""
    section: str = ""
    quantity: str = ""
    commercial_agent: str = ""
    is_eco_flagged: bool = False
    created_date: date = field(default_factory=date.today)


@dataclass(frozen=True)
class OrderRecord:
    id: str
    sequence_number: int
    created_date: date
    description: str
    client_name: str
    section: str
    quantity: str = ""
    commercial_agent: str = ""
    invoice_number: str = ""
    is_eco_flagged: bool = False
    status: OrderStatus = OrderStatus.PENDING


# Checked in this order; the first empty one is reported.
REQUIRED_FIELDS = ("description", "client_name", "section")


def validate_form(form):
    """Return a trimmed copy of the form, or raise ValidationError"""
    for name in REQUIRED_FIELDS:
        if not (getattr(form, name) or "").strip():
            raise ValidationError(name)
    created = _form_date(form.created_date)
    return OrderFormData(
        description=form.description.strip(),
        client_name=form.client_name.strip(),
        section=form.section.strip(),
        quantity=(form.quantity or "").strip(),
        commercial_agent=(form.commercial_agent or "").strip(),
        is_eco_flagged=bool(form.is_eco_flagged),
        created_date=created,
    )


def _form_date(value):
    """A date, a datetime or ISO text such as a date input delivers"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ValidationError("created_date")


# ─── SNAPSHOT ROWS ───

# Keys written by earlier versions of the app, mapped to the current ones.
LEGACY_KEYS = {
    "date": "created_date",
    "createdDate": "created_date",
    "item": "description",
    "client": "client_name",
    "clientName": "client_name",
    "orderNumber": "sequence_number",
    "sequenceNumber": "sequence_number",
    "invoiceNumber": "invoice_number",
    "commercialAgent": "commercial_agent",
    "isOrganicRecycled": "is_eco_flagged",
    "isEcoFlagged": "is_eco_flagged",
}

# Value used when a field is missing from a snapshot row.
FIELD_DEFAULTS = {
    "description": "",
    "client_name": "",
    "section": "",
    "quantity": "",
    "commercial_agent": "",
    "invoice_number": "",
    "is_eco_flagged": False,
    "status": OrderStatus.PENDING,
}


def record_to_dict(record):
    return {
        "id": record.id,
        "sequence_number": record.sequence_number,
        "invoice_number": record.invoice_number,
        "created_date": record.created_date.isoformat(),
        "description": record.description,
        "quantity": record.quantity,
        "client_name": record.client_name,
        "commercial_agent": record.commercial_agent,
        "section": record.section,
        "is_eco_flagged": record.is_eco_flagged,
        "status": record.status.value,
    }


def _normalize_keys(row):
    normalized = {}
    for key, value in row.items():
        normalized.setdefault(LEGACY_KEYS.get(key, key), value)
    return normalized


def _parse_date(value, today):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        logger.warning("Unreadable created_date %r; using %s", value, today)
        return today


def _parse_flag(value):
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "sim")
    return bool(value)


def _parse_status(value):
    try:
        return OrderStatus.parse(value)
    except ValueError:
        logger.warning("Unknown status %r; defaulting to %s", value, OrderStatus.PENDING.value)
        return OrderStatus.PENDING


def _text(value):
    return "" if value is None else str(value)


def record_from_dict(row, today: Optional[date] = None) -> OrderRecord:
    """Read one snapshot row, defaulting whatever is missing or malformed.

    The returned record keeps the stored id (empty string if none) and a
    provisional sequence number; the ledger reassigns both as needed.
    """
    today = today or date.today()
    data = dict(FIELD_DEFAULTS)
    data.update({k: v for k, v in _normalize_keys(row).items() if v is not None})

    created = data.get("created_date")
    if created is None:
        logger.warning("Order %r has no created_date; using %s", data.get("id"), today)
        created = today

    return OrderRecord(
        id=_text(data.get("id")).strip(),
        sequence_number=0,
        created_date=_parse_date(created, today),
        description=_text(data["description"]),
        client_name=_text(data["client_name"]),
        section=_text(data["section"]),
        quantity=_text(data["quantity"]),
        commercial_agent=_text(data["commercial_agent"]),
        invoice_number=_text(data["invoice_number"]),
        is_eco_flagged=_parse_flag(data["is_eco_flagged"]),
        status=_parse_status(data["status"]),
    )
