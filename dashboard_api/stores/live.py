"""
PostgreSQL implementation of InvoiceStore.

Every statement runs on its own connection opened from the configured
connection string; nothing spans more than one statement. Driver errors
are logged here and re-raised as DataAccessError with a fixed message per
operation, so raw database details never reach callers.
"""

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

import psycopg2
import psycopg2.extras

from ..errors import DataAccessError
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

_SEARCH_WHERE = """
    WHERE
      customers.name ILIKE %(pattern)s OR
      customers.email ILIKE %(pattern)s OR
      invoices.amount::text ILIKE %(pattern)s OR
      invoices.date::text ILIKE %(pattern)s OR
      invoices.status ILIKE %(pattern)s
"""

COUNT_INVOICES_SQL = "SELECT COUNT(*) AS count FROM invoices"
COUNT_CUSTOMERS_SQL = "SELECT COUNT(*) AS count FROM customers"
INVOICE_STATUS_SQL = """
    SELECT
      SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END) AS paid,
      SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END) AS pending
    FROM invoices
"""


def _iso(value: Any) -> str:
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


@contextmanager
def _database_errors(message: str) -> Iterator[None]:
    try:
        yield
    except DataAccessError:
        raise
    except Exception as e:
        logger.exception("Database Error: %s", message)
        raise DataAccessError(message) from e


class LiveStore(InvoiceStore):
    """
    Invoice store querying PostgreSQL with psycopg2.

    Attributes:
        database_url: libpq connection string.
        revenue_delay_seconds: Sleep before the revenue query.
    """

    mode = "live"

    def __init__(
        self,
        database_url: str,
        revenue_delay_seconds: float = 0.0,
        connect: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.database_url = database_url
        self.revenue_delay_seconds = revenue_delay_seconds
        self._connect = connect or self._default_connect

    def _default_connect(self):
        return psycopg2.connect(
            self.database_url,
            cursor_factory=psycopg2.extras.RealDictCursor,
        )

    def _run(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        conn = self._connect()
        try:
            with conn:
                with conn.cursor() as cur:
                    cur.execute(sql, params)
                    if cur.description is None:
                        return []
                    return [dict(row) for row in cur.fetchall()]
        finally:
            conn.close()

    def fetch_revenue(self) -> List[Revenue]:
        with _database_errors("Failed to fetch revenue data."):
            if self.revenue_delay_seconds > 0:
                logger.info("Fetching revenue data...")
                time.sleep(self.revenue_delay_seconds)
            rows = self._run("SELECT month, revenue FROM revenue")
            logger.info("Revenue fetch completed, %d rows", len(rows))
            return [Revenue(**row) for row in rows]

    def fetch_latest_invoices(self) -> List[LatestInvoice]:
        with _database_errors("Failed to fetch the latest invoices."):
            rows = self._run(
                """
                SELECT invoices.amount, customers.name, customers.image_url, customers.email, invoices.id
                FROM invoices
                JOIN customers ON invoices.customer_id = customers.id
                ORDER BY invoices.date DESC
                LIMIT %(limit)s
                """,
                {"limit": LATEST_INVOICES_LIMIT},
            )
            return [
                LatestInvoice(
                    id=str(row["id"]),
                    name=row["name"],
                    email=row["email"],
                    image_url=row["image_url"],
                    amount=format_currency(row["amount"]),
                )
                for row in rows
            ]

    def fetch_card_data(self) -> CardData:
        with _database_errors("Failed to fetch card data."):
            # Any failing query aborts the whole call via future.result().
            with ThreadPoolExecutor(max_workers=3) as pool:
                invoice_count = pool.submit(self._run, COUNT_INVOICES_SQL)
                customer_count = pool.submit(self._run, COUNT_CUSTOMERS_SQL)
                invoice_status = pool.submit(self._run, INVOICE_STATUS_SQL)
                invoices, customers, totals = (
                    invoice_count.result(),
                    customer_count.result(),
                    invoice_status.result(),
                )

            totals_row = totals[0] if totals else {}
            return CardData(
                number_of_customers=int(customers[0]["count"] if customers else 0),
                number_of_invoices=int(invoices[0]["count"] if invoices else 0),
                total_paid_invoices=format_currency(totals_row.get("paid") or 0),
                total_pending_invoices=format_currency(totals_row.get("pending") or 0),
            )

    def fetch_filtered_invoices(self, query: str, page: int) -> List[InvoicesTableRow]:
        offset = (max(page, 1) - 1) * ITEMS_PER_PAGE
        with _database_errors("Failed to fetch invoices."):
            rows = self._run(
                """
                SELECT
                  invoices.id,
                  invoices.customer_id,
                  invoices.amount,
                  invoices.date,
                  invoices.status,
                  customers.name,
                  customers.email,
                  customers.image_url
                FROM invoices
                JOIN customers ON invoices.customer_id = customers.id
                """
                + _SEARCH_WHERE
                + """
                ORDER BY invoices.date DESC
                LIMIT %(limit)s OFFSET %(offset)s
                """,
                {"pattern": f"%{query}%", "limit": ITEMS_PER_PAGE, "offset": offset},
            )
            return [
                InvoicesTableRow(
                    id=str(row["id"]),
                    customer_id=str(row["customer_id"]),
                    name=row["name"],
                    email=row["email"],
                    image_url=row["image_url"],
                    date=_iso(row["date"]),
                    amount=int(row["amount"]),
                    status=row["status"],
                )
                for row in rows
            ]

    def fetch_invoices_pages(self, query: str) -> int:
        with _database_errors("Failed to fetch total number of invoices."):
            rows = self._run(
                """
                SELECT COUNT(*) AS count
                FROM invoices
                JOIN customers ON invoices.customer_id = customers.id
                """
                + _SEARCH_WHERE,
                {"pattern": f"%{query}%"},
            )
            count = int(rows[0]["count"]) if rows else 0
            return math.ceil(count / ITEMS_PER_PAGE)

    def fetch_invoice_by_id(self, invoice_id: str) -> Optional[InvoiceForm]:
        with _database_errors("Failed to fetch invoice."):
            rows = self._run(
                """
                SELECT
                  invoices.id,
                  invoices.customer_id,
                  invoices.amount,
                  invoices.status
                FROM invoices
                WHERE invoices.id = %(id)s
                """,
                {"id": invoice_id},
            )
            if not rows:
                return None
            row = rows[0]
            return InvoiceForm(
                id=str(row["id"]),
                customer_id=str(row["customer_id"]),
                amount=cents_to_dollars(row["amount"]),
                status=row["status"],
            )

    def fetch_customers(self) -> List[CustomerField]:
        with _database_errors("Failed to fetch all customers."):
            rows = self._run("SELECT id, name FROM customers ORDER BY name ASC")
            return [CustomerField(id=str(row["id"]), name=row["name"]) for row in rows]

    def fetch_filtered_customers(self, query: str) -> List[CustomersTableRow]:
        with _database_errors("Failed to fetch customer table."):
            rows = self._run(
                """
                SELECT
                  customers.id,
                  customers.name,
                  customers.email,
                  customers.image_url,
                  COUNT(invoices.id) AS total_invoices,
                  SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END) AS total_pending,
                  SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END) AS total_paid
                FROM customers
                LEFT JOIN invoices ON customers.id = invoices.customer_id
                WHERE
                  customers.name ILIKE %(pattern)s OR
                  customers.email ILIKE %(pattern)s
                GROUP BY customers.id, customers.name, customers.email, customers.image_url
                ORDER BY customers.name ASC
                """,
                {"pattern": f"%{query}%"},
            )
            return [
                CustomersTableRow(
                    id=str(row["id"]),
                    name=row["name"],
                    email=row["email"],
                    image_url=row["image_url"],
                    total_invoices=int(row["total_invoices"] or 0),
                    total_pending=format_currency(row["total_pending"] or 0),
                    total_paid=format_currency(row["total_paid"] or 0),
                )
                for row in rows
            ]

    def fetch_recent_invoice_amounts(self, limit: int = 10) -> List[InvoiceAmount]:
        with _database_errors("Failed to fetch invoices"):
            rows = self._run(
                """
                SELECT invoices.amount, customers.name
                FROM invoices
                JOIN customers ON invoices.customer_id = customers.id
                ORDER BY invoices.date DESC
                LIMIT %(limit)s
                """,
                {"limit": limit},
            )
            return [InvoiceAmount(amount=int(row["amount"]), name=row["name"]) for row in rows]

    def create_invoice(self, customer_id: str, amount: int, status: str, date: str) -> None:
        with _database_errors("Failed to create invoice."):
            self._run(
                """
                INSERT INTO invoices (customer_id, amount, status, date)
                VALUES (%(customer_id)s, %(amount)s, %(status)s, %(date)s)
                """,
                {"customer_id": customer_id, "amount": amount, "status": status, "date": date},
            )
        logger.info("Created %s invoice for customer %s", status, customer_id)

    def update_invoice(self, invoice_id: str, customer_id: str, amount: int, status: str) -> None:
        with _database_errors("Failed to update invoice."):
            self._run(
                """
                UPDATE invoices
                SET customer_id = %(customer_id)s, amount = %(amount)s, status = %(status)s
                WHERE id = %(id)s
                """,
                {"id": invoice_id, "customer_id": customer_id, "amount": amount, "status": status},
            )
        logger.info("Updated invoice %s", invoice_id)

    def delete_invoice(self, invoice_id: str) -> None:
        with _database_errors("Failed to delete invoice."):
            self._run("DELETE FROM invoices WHERE id = %(id)s", {"id": invoice_id})
        logger.info("Deleted invoice %s", invoice_id)
