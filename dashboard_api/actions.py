"""
Invoice mutation actions: create, update and delete.

Each action validates its input, writes through the injected store,
invalidates the invoice list view and returns a redirect to it. With the
fallback store the write is skipped but the invalidate + redirect still
happens, so callers cannot tell a saved change from a dropped one.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .cache import ViewCache
from .errors import InvoiceValidationError
from .models import InvoiceFormInput
from .stores import InvoiceStore
from .utils import dollars_to_cents

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"

FORM_FIELDS = ("customerId", "amount", "status")


@dataclass(frozen=True)
class Redirect:
    location: str


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else "form"
        errors.setdefault(field, []).append(error["msg"])
    return errors


def parse_invoice_form(form: Mapping[str, Any], action: str) -> InvoiceFormInput:
    """
    Validate a raw form payload.

    Raises:
        InvoiceValidationError: With per-field messages keyed by form field name.
    """
    try:
        return InvoiceFormInput.model_validate({name: form.get(name) for name in FORM_FIELDS})
    except ValidationError as e:
        raise InvoiceValidationError(
            f"Missing Fields. Failed to {action} Invoice.",
            field_errors=_field_errors(e),
        ) from e


def _revalidate_and_redirect(cache: ViewCache) -> Redirect:
    cache.revalidate_path(INVOICES_PATH)
    logger.debug("Redirecting to %s", INVOICES_PATH)
    return Redirect(location=INVOICES_PATH)


def create_invoice(
    store: InvoiceStore,
    cache: ViewCache,
    form: Mapping[str, Any],
    today: Optional[Callable[[], date]] = None,
) -> Redirect:
    data = parse_invoice_form(form, "Create")
    amount_in_cents = dollars_to_cents(data.amount)
    created_on = (today or date.today)().isoformat()

    store.create_invoice(data.customer_id, amount_in_cents, data.status.value, created_on)
    return _revalidate_and_redirect(cache)


def update_invoice(
    store: InvoiceStore,
    cache: ViewCache,
    invoice_id: str,
    form: Mapping[str, Any],
) -> Redirect:
    data = parse_invoice_form(form, "Update")
    amount_in_cents = dollars_to_cents(data.amount)

    store.update_invoice(invoice_id, data.customer_id, amount_in_cents, data.status.value)
    return _revalidate_and_redirect(cache)


def delete_invoice(store: InvoiceStore, cache: ViewCache, invoice_id: str) -> Redirect:
    store.delete_invoice(invoice_id)
    return _revalidate_and_redirect(cache)
