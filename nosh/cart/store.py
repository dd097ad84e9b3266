from __future__ import annotations

from uuid import uuid4

from .models import CartLineItem


class CartStore:
    """Ordered cart lines, at most one per (restaurant, item) pair."""

    def __init__(self) -> None:
        self._lines: list[CartLineItem] = []

    @property
    def items(self) -> list[CartLineItem]:
        return list(self._lines)

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def _find(self, line_id: str) -> CartLineItem | None:
        for line in self._lines:
            if line.id == line_id:
                return line
        return None

    def add(self, restaurant: str, item: str, price: float) -> CartLineItem:
        for line in self._lines:
            if line.restaurant == restaurant and line.item == item:
                line.quantity += 1
                return line

        line = CartLineItem(
            id=uuid4().hex,
            restaurant=restaurant,
            item=item,
            price=price,
        )
        self._lines.append(line)
        return line

    def remove(self, line_id: str) -> None:
        self._lines = [line for line in self._lines if line.id != line_id]

    def update_quantity(self, line_id: str, delta: int) -> CartLineItem | None:
        """Shift a line's quantity; dropping to zero or below removes it.

        Returns the updated line, or ``None`` if it was removed or never existed.
        """
        line = self._find(line_id)
        if line is None:
            return None
        if line.quantity + delta <= 0:
            self.remove(line_id)
            return None
        line.quantity += delta
        return line

    def subtotal(self) -> float:
        return sum((line.line_total for line in self._lines), 0.0)

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)
