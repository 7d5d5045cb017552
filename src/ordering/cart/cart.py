"""Cart aggregator: the single owner of a shopper's line items.

The aggregator keeps line items in insertion order with at most one entry per
(product_id, variant_key). It is restored from the cart store once at startup
and writes its full state back after every mutating operation, so a reload
loses at most the operation in flight.

Consumers receive the instance explicitly; there is no module-level cart.
"""

import json

from protean.exceptions import ValidationError

from ordering.cart.line_item import LineItem
from ordering.cart.totals import cart_total, item_count
from ordering.domain import logger
from shared.config import get_settings
from shared.exceptions import CollaboratorError


class CartAggregator:
    def __init__(self, store, key=None, items=()):
        self._store = store
        self._key = key or get_settings().cart_storage_key
        self._items: list[LineItem] = []
        for item in items:
            self._merge(item)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def restore(cls, store, key=None):
        """Build an aggregator from the persisted snapshot.

        A missing or unreadable snapshot yields an empty cart.
        """
        key = key or get_settings().cart_storage_key
        payload = store.load(key)
        if not payload:
            return cls(store, key)

        try:
            records = json.loads(payload)
            if not isinstance(records, list):
                raise ValidationError({"cart": ["Persisted cart must be a list"]})
            items = [LineItem.from_record(record) for record in records]
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("cart_snapshot_discarded", key=key, error=str(exc))
            return cls(store, key)

        cart = cls(store, key, items)
        logger.debug("cart_restored", key=key, entries=len(cart), item_count=cart.item_count)
        return cart

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, item):
        """Add an item, or increase the quantity of the matching entry."""
        self._merge(item)
        logger.debug("cart_item_added", product_id=str(item.product_id), variant=item.variant_key, quantity=item.quantity)
        self._persist()

    def remove(self, product_id, variant_key):
        """Remove the matching entry. Absent entries are ignored."""
        key = (str(product_id), variant_key)
        self._items = [i for i in self._items if i.key != key]
        self._persist()

    def set_quantity(self, product_id, variant_key, new_quantity):
        """Replace the quantity of the matching entry with ``max(1, new_quantity)``."""
        index = self._index_of((str(product_id), variant_key))
        if index is not None:
            self._items[index] = self._items[index].with_quantity(max(1, int(new_quantity)))
        self._persist()

    def clear(self):
        self._items = []
        logger.debug("cart_cleared", key=self._key)
        self._persist()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def snapshot(self):
        """Immutable copy of the current line items."""
        return tuple(self._items)

    def find(self, product_id, variant_key):
        index = self._index_of((str(product_id), variant_key))
        return None if index is None else self._items[index]

    @property
    def item_count(self):
        return item_count(self._items)

    @property
    def total(self):
        return cart_total(self._items)

    @property
    def is_empty(self):
        return not self._items

    def __len__(self):
        return len(self._items)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _index_of(self, key):
        return next((index for index, item in enumerate(self._items) if item.key == key), None)

    def _merge(self, item):
        index = self._index_of(item.key)
        if index is None:
            self._items.append(item)
        else:
            existing = self._items[index]
            self._items[index] = existing.with_quantity(existing.quantity + item.quantity)

    def _persist(self):
        payload = json.dumps([item.to_record() for item in self._items])
        try:
            self._store.save(self._key, payload)
        except CollaboratorError:
            logger.error("cart_persist_failed", key=self._key, entries=len(self._items))
            raise
