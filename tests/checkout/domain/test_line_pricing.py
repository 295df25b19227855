"""Tests for pricing checkout lines in minor units."""

from storefront.checkout.orchestrator import CheckoutProduct, CheckoutQuote, price_line_items
from storefront.shared.money import percent_of


def _products():
    return [
        CheckoutProduct(id="prod-001", name="Tee", price=10.00, quantity=2),
        CheckoutProduct(id="prod-002", name="Cap", price=5.00, quantity=1, image="https://img/cap.png"),
    ]


class TestPriceLineItems:
    def test_total_without_coupon(self):
        _, total = price_line_items(_products())
        assert total == 2500

    def test_total_with_ten_percent_coupon(self):
        _, total = price_line_items(_products())
        assert total - percent_of(total, 10) == 2250

    def test_line_items_in_cents(self):
        line_items, _ = price_line_items(_products())
        assert [(item.name, item.unit_amount, item.quantity) for item in line_items] == [
            ("Tee", 1000, 2),
            ("Cap", 500, 1),
        ]
        assert line_items[1].image == "https://img/cap.png"

    def test_fractional_prices_round_to_cents(self):
        line_items, total = price_line_items([CheckoutProduct(id="p", name="Gum", price=19.99, quantity=3)])
        assert line_items[0].unit_amount == 1999
        assert total == 5997


class TestCheckoutQuote:
    def test_total_reported_in_dollars(self):
        quote = CheckoutQuote(session_id="cs_123", total_amount=2250)
        assert quote.to_dict() == {"id": "cs_123", "total_amount": 22.5}
