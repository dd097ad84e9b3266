from __future__ import annotations

from pydantic import BaseModel, Field


class CartLineItem(BaseModel):
    id: str
    restaurant: str
    item: str
    price: float = Field(..., ge=0.0)
    quantity: int = Field(default=1, ge=1)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class AddItemRequest(BaseModel):
    restaurant: str = Field(..., min_length=1)
    item: str = Field(..., min_length=1)
    price: float = Field(..., ge=0.0)


class QuantityChange(BaseModel):
    delta: int


class CheckoutTotals(BaseModel):
    subtotal: float
    delivery_fee: float
    tax: float
    total: float


class CartView(BaseModel):
    items: list[CartLineItem]
    count: int
    totals: CheckoutTotals


class OrderConfirmation(BaseModel):
    order_number: str
    paid: float
    totals: CheckoutTotals
    items: list[CartLineItem]
