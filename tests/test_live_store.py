"""Tests for the PostgreSQL store against a recording fake connection."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from dashboard_api.errors import DataAccessError
from dashboard_api.stores import LiveStore


def _answer(rows_by_fragment: dict):
    def responder(sql, params):
        for fragment, rows in rows_by_fragment.items():
            if fragment in sql:
                return rows
        return None

    return responder


class TestReads:
    def test_revenue(self, fake_db, live_store):
        fake_db.responder = _answer({"FROM revenue": [{"month": "Jan", "revenue": 2000}]})

        revenue = live_store.fetch_revenue()

        assert [r.model_dump() for r in revenue] == [{"month": "Jan", "revenue": 2000}]
        assert fake_db.statements == [("SELECT month, revenue FROM revenue", None)]
        assert all(conn.closed for conn in fake_db.connections)

    def test_latest_invoices_formats_amount(self, fake_db, live_store):
        invoice_id = uuid.uuid4()
        fake_db.responder = _answer({
            "LIMIT": [{
                "id": invoice_id,
                "amount": 15795,
                "name": "Evil Rabbit",
                "email": "evil@rabbit.com",
                "image_url": "/customers/evil-rabbit.png",
            }],
        })

        [latest] = live_store.fetch_latest_invoices()

        assert latest.id == str(invoice_id)
        assert latest.amount == "$157.95"
        statement, params = fake_db.statements[0]
        assert "ORDER BY invoices.date DESC" in statement
        assert params == {"limit": 5}

    def test_card_data_runs_three_queries(self, fake_db, live_store):
        fake_db.responder = _answer({
            "SUM(CASE": [{"paid": Decimal("100626"), "pending": Decimal("125632")}],
            "FROM customers": [{"count": 6}],
            "FROM invoices": [{"count": 13}],
        })

        cards = live_store.fetch_card_data()

        assert cards.number_of_customers == 6
        assert cards.number_of_invoices == 13
        assert cards.total_paid_invoices == "$1,006.26"
        assert cards.total_pending_invoices == "$1,256.32"
        assert len(fake_db.connections) == 3

    def test_card_data_empty_tables(self, fake_db, live_store):
        fake_db.responder = _answer({
            "SUM(CASE": [{"paid": None, "pending": None}],
            "FROM customers": [{"count": 0}],
            "FROM invoices": [{"count": 0}],
        })

        cards = live_store.fetch_card_data()

        assert cards.total_paid_invoices == "$0.00"
        assert cards.total_pending_invoices == "$0.00"

    def test_card_data_fails_when_one_query_fails(self, fake_db, live_store):
        def responder(sql, params):
            if "FROM customers" in sql:
                raise RuntimeError("connection reset by peer")
            return [{"count": 1, "paid": 0, "pending": 0}]

        fake_db.responder = responder

        with pytest.raises(DataAccessError) as excinfo:
            live_store.fetch_card_data()
        assert str(excinfo.value) == "Failed to fetch card data."
        assert "connection reset" not in str(excinfo.value)

    def test_filtered_invoices_query_and_offset(self, fake_db, live_store):
        fake_db.responder = _answer({
            "LIMIT": [{
                "id": "inv-1",
                "customer_id": "cust-4",
                "amount": 20348,
                "date": date(2022, 11, 14),
                "status": "pending",
                "name": "Lee Robinson",
                "email": "lee@robinson.com",
                "image_url": "/customers/lee-robinson.png",
            }],
        })

        [row] = live_store.fetch_filtered_invoices("lee", 2)

        assert row.date == "2022-11-14"
        assert row.customer_id == "cust-4"
        assert row.amount == 20348
        statement, params = fake_db.statements[0]
        assert "customers.name ILIKE %(pattern)s" in statement
        assert "invoices.amount::text ILIKE %(pattern)s" in statement
        assert params == {"pattern": "%lee%", "limit": 6, "offset": 6}

    def test_invoices_pages_rounds_up(self, fake_db, live_store):
        fake_db.responder = _answer({"COUNT(*)": [{"count": 7}]})
        assert live_store.fetch_invoices_pages("li") == 2

    def test_invoice_by_id_converts_to_dollars(self, fake_db, live_store):
        fake_db.responder = _answer({
            "WHERE invoices.id": [{"id": "inv-1", "customer_id": "c1", "amount": 12345, "status": "paid"}],
        })

        invoice = live_store.fetch_invoice_by_id("inv-1")

        assert invoice.amount == 123.45
        assert fake_db.statements[0][1] == {"id": "inv-1"}

    def test_invoice_by_id_not_found(self, fake_db, live_store):
        fake_db.responder = _answer({"WHERE invoices.id": []})
        assert live_store.fetch_invoice_by_id("missing") is None

    def test_customers_ordered_by_name(self, fake_db, live_store):
        fake_db.responder = _answer({"FROM customers": [{"id": "c1", "name": "Amy Burns"}]})

        [customer] = live_store.fetch_customers()

        assert customer.name == "Amy Burns"
        assert fake_db.statements[0][0].endswith("ORDER BY name ASC")

    def test_filtered_customers_formats_totals(self, fake_db, live_store):
        fake_db.responder = _answer({
            "LEFT JOIN invoices": [{
                "id": "c1",
                "name": "Delba de Oliveira",
                "email": "delba@oliveira.com",
                "image_url": "/customers/delba-de-oliveira.png",
                "total_invoices": 2,
                "total_pending": Decimal("20348"),
                "total_paid": None,
            }],
        })

        [row] = live_store.fetch_filtered_customers("delba")

        assert row.total_invoices == 2
        assert row.total_pending == "$203.48"
        assert row.total_paid == "$0.00"
        assert fake_db.statements[0][1] == {"pattern": "%delba%"}

    def test_recent_invoice_amounts(self, fake_db, live_store):
        fake_db.responder = _answer({"LIMIT": [{"amount": 500, "name": "Delba de Oliveira"}]})

        rows = live_store.fetch_recent_invoice_amounts(limit=10)

        assert [r.model_dump() for r in rows] == [{"amount": 500, "name": "Delba de Oliveira"}]
        assert fake_db.statements[0][1] == {"limit": 10}


class TestErrors:
    @pytest.mark.parametrize(
        ("call", "message"),
        [
            (lambda s: s.fetch_revenue(), "Failed to fetch revenue data."),
            (lambda s: s.fetch_latest_invoices(), "Failed to fetch the latest invoices."),
            (lambda s: s.fetch_filtered_invoices("", 1), "Failed to fetch invoices."),
            (lambda s: s.fetch_invoices_pages(""), "Failed to fetch total number of invoices."),
            (lambda s: s.fetch_invoice_by_id("x"), "Failed to fetch invoice."),
            (lambda s: s.fetch_customers(), "Failed to fetch all customers."),
            (lambda s: s.fetch_filtered_customers(""), "Failed to fetch customer table."),
            (lambda s: s.delete_invoice("x"), "Failed to delete invoice."),
        ],
    )
    def test_driver_errors_become_domain_errors(self, fake_db, live_store, call, message):
        def responder(sql, params):
            raise RuntimeError("password authentication failed for user")

        fake_db.responder = responder

        with pytest.raises(DataAccessError) as excinfo:
            call(live_store)
        assert str(excinfo.value) == message
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_connect_failure(self):
        def connect():
            raise RuntimeError("could not connect to server")

        store = LiveStore("postgresql://nowhere/db", connect=connect)
        with pytest.raises(DataAccessError, match="Failed to fetch all customers."):
            store.fetch_customers()


class TestWrites:
    def test_update_sets_mutable_columns_only(self, fake_db, live_store):
        live_store.update_invoice("inv-1", "c2", 9900, "paid")

        statement, params = fake_db.statements[0]
        assert statement.startswith("UPDATE invoices SET customer_id = %(customer_id)s")
        assert "date =" not in statement
        assert params == {"id": "inv-1", "customer_id": "c2", "amount": 9900, "status": "paid"}

    def test_delete(self, fake_db, live_store):
        live_store.delete_invoice("inv-1")
        assert fake_db.statements == [("DELETE FROM invoices WHERE id = %(id)s", {"id": "inv-1"})]
