"""
Location layer.

Responsibilities:
- Great-circle distance between coordinates (scalar and vectorised).
- Short-lived cache of the device coordinate.
- Bounded-timeout device location lookup that never fails the caller.
"""
