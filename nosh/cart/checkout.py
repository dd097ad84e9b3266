from __future__ import annotations

import logging
import random
from datetime import datetime

from .config import DEFAULT_CHECKOUT_CONFIG, CheckoutConfig
from .models import CheckoutTotals, OrderConfirmation
from .store import CartStore

logger = logging.getLogger(__name__)


class EmptyCartError(Exception):
    """Checkout was attempted with nothing in the cart."""


def totals(subtotal: float, config: CheckoutConfig = DEFAULT_CHECKOUT_CONFIG) -> CheckoutTotals:
    delivery_fee = config.delivery_fee if subtotal > 0 else 0.0
    tax = subtotal * config.tax_rate
    return CheckoutTotals(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        tax=tax,
        total=subtotal + delivery_fee + tax,
    )


def _order_number(config: CheckoutConfig, rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return f"{config.order_prefix}-{datetime.now().year}-{rng.randint(0, 999):03d}"


def place_order(
    cart: CartStore,
    config: CheckoutConfig = DEFAULT_CHECKOUT_CONFIG,
    rng: random.Random | None = None,
) -> OrderConfirmation:
    """Charge the cart's total, then empty it.

    Raises ``EmptyCartError`` when there is nothing to pay for.
    """
    if len(cart) == 0:
        raise EmptyCartError("Cart is empty")

    summary = totals(cart.subtotal(), config)
    confirmation = OrderConfirmation(
        order_number=_order_number(config, rng),
        paid=round(summary.total, 2),
        totals=summary,
        items=cart.items,
    )
    cart.clear()

    logger.info("Placed order %s for %.2f", confirmation.order_number, confirmation.paid)
    return confirmation
