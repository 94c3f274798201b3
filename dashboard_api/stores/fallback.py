"""
In-memory implementation of InvoiceStore over the placeholder data.

Used whenever no database connection string is configured, so the
dashboard keeps rendering during local development. Reads are computed
over the seed collections and cannot fail; writes are logged and skipped.

Invoice ids handed out by this store are positional: latest invoices and
search results are numbered by their position in the returned list, and
fetch_invoice_by_id resolves an id as a position in the seed collection.
They are synthetic keys, not stable across data or query changes.
"""

import logging
import math
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from .. import placeholder_data
from ..errors import StoreNotConfiguredError
from ..models import (
    CardData,
    CustomerField,
    CustomersTableRow,
    InvoiceAmount,
    InvoiceForm,
    InvoicesTableRow,
    LatestInvoice,
    Revenue,
)
from ..utils import cents_to_dollars, format_currency
from .base import ITEMS_PER_PAGE, LATEST_INVOICES_LIMIT, InvoiceStore

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def matches_query(invoice: Row, customer: Optional[Row], query: str) -> bool:
    """Case-insensitive substring match over the searchable invoice fields."""
    needle = query.lower()
    fields = [str(invoice["amount"]), str(invoice["date"]), str(invoice["status"])]
    if customer is not None:
        fields += [customer["name"], customer["email"]]
    return any(needle in field.lower() for field in fields)


def _newest_first(invoices: Sequence[Row]) -> List[Row]:
    return sorted(invoices, key=lambda inv: date.fromisoformat(inv["date"]), reverse=True)


class FallbackStore(InvoiceStore):
    """
    Invoice store backed by static placeholder collections.

    Attributes:
        customers: Customer rows, expected sorted by name.
        invoices: Invoice rows without ids, amounts in cents.
        revenue: Monthly revenue rows.
    """

    mode = "fallback"

    def __init__(
        self,
        customers: Optional[Sequence[Row]] = None,
        invoices: Optional[Sequence[Row]] = None,
        revenue: Optional[Sequence[Row]] = None,
    ) -> None:
        self.customers = placeholder_data.customers if customers is None else customers
        self.invoices = placeholder_data.invoices if invoices is None else invoices
        self.revenue = placeholder_data.revenue if revenue is None else revenue
        self._customers_by_id = {c["id"]: c for c in self.customers}

    def _customer(self, customer_id: str) -> Optional[Row]:
        return self._customers_by_id.get(customer_id)

    def _filter(self, query: str) -> List[Row]:
        return [
            inv for inv in self.invoices
            if matches_query(inv, self._customer(inv["customer_id"]), query)
        ]

    def fetch_revenue(self) -> List[Revenue]:
        return [Revenue(**row) for row in self.revenue]

    def fetch_latest_invoices(self) -> List[LatestInvoice]:
        latest = []
        for index, inv in enumerate(_newest_first(self.invoices)[:LATEST_INVOICES_LIMIT]):
            customer = self._customer(inv["customer_id"]) or {}
            latest.append(LatestInvoice(
                id=str(index),
                name=customer.get("name") or "Unknown",
                email=customer.get("email") or "",
                image_url=customer.get("image_url") or "",
                amount=format_currency(inv["amount"]),
            ))
        return latest

    def fetch_card_data(self) -> CardData:
        paid = sum(inv["amount"] for inv in self.invoices if inv["status"] == "paid")
        pending = sum(inv["amount"] for inv in self.invoices if inv["status"] == "pending")
        return CardData(
            number_of_customers=len(self.customers),
            number_of_invoices=len(self.invoices),
            total_paid_invoices=format_currency(paid),
            total_pending_invoices=format_currency(pending),
        )

    def fetch_filtered_invoices(self, query: str, page: int) -> List[InvoicesTableRow]:
        offset = (max(page, 1) - 1) * ITEMS_PER_PAGE
        rows = _newest_first(self._filter(query))[offset:offset + ITEMS_PER_PAGE]

        items = []
        for index, inv in enumerate(rows):
            customer = self._customer(inv["customer_id"]) or {}
            items.append(InvoicesTableRow(
                id=str(index),
                customer_id=inv["customer_id"],
                name=customer.get("name") or "Unknown",
                email=customer.get("email") or "",
                image_url=customer.get("image_url") or "",
                date=inv["date"],
                amount=inv["amount"],
                status=inv["status"],
            ))
        return items

    def fetch_invoices_pages(self, query: str) -> int:
        return math.ceil(len(self._filter(query)) / ITEMS_PER_PAGE)

    def fetch_invoice_by_id(self, invoice_id: str) -> Optional[InvoiceForm]:
        for index, inv in enumerate(self.invoices):
            if str(index) == invoice_id:
                return InvoiceForm(
                    id=invoice_id,
                    customer_id=inv["customer_id"],
                    amount=cents_to_dollars(inv["amount"]),
                    status=inv["status"],
                )
        return None

    def fetch_customers(self) -> List[CustomerField]:
        ordered = sorted(self.customers, key=lambda c: c["name"])
        return [CustomerField(id=c["id"], name=c["name"]) for c in ordered]

    def fetch_filtered_customers(self, query: str) -> List[CustomersTableRow]:
        raise StoreNotConfiguredError("Failed to fetch customer table.")

    def fetch_recent_invoice_amounts(self, limit: int = 10) -> List[InvoiceAmount]:
        raise StoreNotConfiguredError("POSTGRES_URL/DATABASE_URL is not configured")

    def create_invoice(self, customer_id: str, amount: int, status: str, date: str) -> None:
        logger.info("No database configured, skipping invoice creation")

    def update_invoice(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
        logger.info("No database configured, skipping invoice update")

    def delete_invoice(self, invoice_id: str) -> None:
        logger.info("No database configured, skipping invoice deletion")
