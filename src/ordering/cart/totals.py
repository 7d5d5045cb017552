"""Derived cart totals.

Recomputed from a snapshot on every read; nothing here is cached.
"""


def item_count(items):
    """Total number of units across all line items."""
    return sum(item.quantity for item in items)


def cart_total(items):
    """Monetary total in whole currency units."""
    return sum(item.unit_price * item.quantity for item in items)
