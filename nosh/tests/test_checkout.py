import random
import re

import pytest

from nosh.cart.checkout import EmptyCartError, place_order, totals
from nosh.cart.config import CheckoutConfig
from nosh.cart.store import CartStore


def test_totals_of_zero():
    t = totals(0)
    assert (t.delivery_fee, t.tax, t.total) == (0, 0, 0)


def test_totals_of_one_hundred():
    t = totals(100)
    assert t.delivery_fee == 2.99
    assert t.tax == pytest.approx(8.875)
    assert t.total == pytest.approx(111.865)


def test_totals_use_config():
    t = totals(10, CheckoutConfig(delivery_fee=1.0, tax_rate=0.1))
    assert t.total == pytest.approx(12.0)


def test_place_order_refuses_empty_cart():
    with pytest.raises(EmptyCartError):
        place_order(CartStore())


def test_place_order_clears_cart_and_reports_total():
    cart = CartStore()
    cart.add("Spice Route", "Chicken Curry", 12.99)
    cart.add("Spice Route", "Chicken Curry", 12.99)

    confirmation = place_order(cart, rng=random.Random(7))

    assert len(cart) == 0
    assert re.fullmatch(r"#NS-\d{4}-\d{3}", confirmation.order_number)
    assert confirmation.totals.subtotal == pytest.approx(25.98)
    assert confirmation.paid == round(25.98 + 2.99 + 25.98 * 0.08875, 2)
    assert [line.quantity for line in confirmation.items] == [2]
