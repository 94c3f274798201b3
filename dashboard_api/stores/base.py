"""
Abstract base class defining the dashboard data access contract.

Every read the dashboard needs and every invoice write goes through an
InvoiceStore. The concrete store is picked once, when the app is built,
and injected into routes and actions.

Implementations:
- LiveStore: parameterized SQL against PostgreSQL
- FallbackStore: static placeholder data, writes are skipped
"""

from abc import ABC, abstractmethod
from typing import List, Optional

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

ITEMS_PER_PAGE = 6
LATEST_INVOICES_LIMIT = 5


class InvoiceStore(ABC):
    """
    Abstract base class for dashboard data access.

    Read operations raise DataAccessError on failure and return None for a
    missing invoice. Writes take amounts already converted to cents.
    """

    mode: str = ""

    @abstractmethod
    def fetch_revenue(self) -> List[Revenue]:
        """Return the full revenue table."""

    @abstractmethod
    def fetch_latest_invoices(self) -> List[LatestInvoice]:
        """Return the five newest invoices joined with their customer."""

    @abstractmethod
    def fetch_card_data(self) -> CardData:
        """Return customer/invoice counts and paid/pending totals."""

    @abstractmethod
    def fetch_filtered_invoices(self, query: str, page: int) -> List[InvoicesTableRow]:
        """
        Return one page of invoices matching the search query.

        Args:
            query: Case-insensitive substring matched against customer name,
                customer email, amount, date and status.
            page: Page number (1-indexed), ITEMS_PER_PAGE rows per page.
        """

    @abstractmethod
    def fetch_invoices_pages(self, query: str) -> int:
        """Return the number of pages fetch_filtered_invoices has for query."""

    @abstractmethod
    def fetch_invoice_by_id(self, invoice_id: str) -> Optional[InvoiceForm]:
        """Return the invoice with its amount in dollars, or None."""

    @abstractmethod
    def fetch_customers(self) -> List[CustomerField]:
        """Return every customer's id and name, ordered by name."""

    @abstractmethod
    def fetch_filtered_customers(self, query: str) -> List[CustomersTableRow]:
        """Return customers matching name/email with their invoice totals."""

    @abstractmethod
    def fetch_recent_invoice_amounts(self, limit: int = 10) -> List[InvoiceAmount]:
        """Return amount and customer name of the newest invoices."""

    @abstractmethod
    def create_invoice(self, customer_id: str, amount: int, status: str, date: str) -> None:
        pass

    @abstractmethod
    def update_invoice(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
        pass

    @abstractmethod
    def delete_invoice(self, invoice_id: str) -> None:
        pass
