"""Ordering bounded context: Shopping Cart, Checkout and Order storage.

Holds the cart aggregator and its persisted snapshot, the order drafter that
turns a cart snapshot into a submission, and the placed-order aggregate the
submission is stored as.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
ordering = Domain(name="ordering")
