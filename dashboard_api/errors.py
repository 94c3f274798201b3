"""Error kinds raised by the data-access layer and the invoice actions."""

from typing import Dict, List, Optional


class DataAccessError(Exception):
    """A store operation failed. The message is safe to show to callers."""


class StoreNotConfiguredError(DataAccessError):
    """The operation needs a live database and none is configured."""


class InvoiceValidationError(ValueError):
    """Invoice form input was rejected before touching the store."""

    def __init__(self, message: str, field_errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.message = message
        self.field_errors = field_errors or {}
