from decimal import Decimal

from dashboard_api.utils import cents_to_dollars, dollars_to_cents, format_currency


def test_format_currency():
    assert format_currency(0) == "$0.00"
    assert format_currency(666) == "$6.66"
    assert format_currency(125632) == "$1,256.32"
    assert format_currency(Decimal("100000000")) == "$1,000,000.00"
    assert format_currency(-150) == "-$1.50"
    assert format_currency(None) == "$0.00"


def test_dollar_conversions():
    assert dollars_to_cents(Decimal("50.00")) == 5000
    assert dollars_to_cents(Decimal("0.29")) == 29
    assert dollars_to_cents(19.99) == 1999
    assert cents_to_dollars(5000) == 50.0
    assert cents_to_dollars(12345) == 123.45
