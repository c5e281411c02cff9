"""
Order Ledger Errors
"""


class LedgerError(Exception):
    """Base class for ledger errors"""


class ValidationError(LedgerError):
    """A required form field is missing or unreadable"""

    def __init__(self, field):
        self.field = field
        super().__init__(f"Required field is empty: {field}")


class NotFoundError(LedgerError):
    """No record with the given id"""

    def __init__(self, record_id):
        self.record_id = record_id
        super().__init__(f"Order not found: {record_id}")


class PersistenceWarning(UserWarning):
    """Save/load failure. Logged and issued through warnings, never raised to ledger callers."""
