"""
Cart and checkout.

Responsibilities:
- Keep one line per (restaurant, item) pair with a positive quantity.
- Derive subtotal, delivery fee, tax and grand total.
- Place an order: number it, report what was paid, empty the cart.
"""
