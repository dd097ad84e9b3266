from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CheckoutConfig:
    delivery_fee: float = 2.99
    tax_rate: float = 0.08875  # 8.875%
    order_prefix: str = "#NS"


DEFAULT_CHECKOUT_CONFIG = CheckoutConfig()
