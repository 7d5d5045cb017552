"""In-memory catalog for development and testing.

Evaluates a QueryDescriptor the way a document store would:

- documents without a value for the ordering field are left out,
- ties on the ordering field are broken by document id, in the same direction,
- a cursor resumes strictly after the (value, id) position it names.

Like the fake payment gateway, it can be told to fail, records every query it
receives, and can hold fetches in flight until released.
"""

import asyncio

from catalogue.listing.query import Direction, PageCursor, QueryDescriptor
from catalogue.source.port import CatalogPage, CatalogSource
from shared.exceptions import CollaboratorError


def _matches(doc, descriptor):
    price = doc.get(descriptor.price_range.field)
    if price is None or not descriptor.price_range.lower <= price <= descriptor.price_range.upper:
        return False

    for predicate in descriptor.predicates:
        value = doc.get(predicate.field)
        if predicate.op == "==":
            if value != predicate.value:
                return False
        elif predicate.op == "in":
            if value not in predicate.value:
                return False
        elif predicate.op == "array-contains":
            if predicate.value not in (value or ()):
                return False
        else:
            raise ValueError(f"Unsupported operator: {predicate.op}")
    return True


class InMemoryCatalog(CatalogSource):
    """Configurable in-memory catalog."""

    def __init__(self, products=()) -> None:
        self.products: list[dict] = [dict(p) for p in products]
        self.should_succeed: bool = True
        self.failure_reason: str = "Catalog unavailable"
        self.calls: list[QueryDescriptor] = []
        self._gate: asyncio.Event | None = None

    def configure(self, should_succeed: bool, failure_reason: str = "Catalog unavailable") -> None:
        """Configure catalog behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def add(self, *products: dict) -> None:
        self.products.extend(dict(p) for p in products)

    def hold(self) -> None:
        """Keep subsequent fetches suspended until ``release`` is called."""
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()
            self._gate = None

    async def fetch(self, descriptor: QueryDescriptor) -> CatalogPage:
        self.calls.append(descriptor)

        gate = self._gate
        if gate is not None:
            await gate.wait()

        if not self.should_succeed:
            raise CollaboratorError("catalog", self.failure_reason)

        field = descriptor.ordering.field
        reverse = descriptor.ordering.direction is Direction.DESCENDING

        def position(doc):
            return (doc[field], str(doc["id"]))

        docs = [d for d in self.products if d.get(field) is not None and _matches(d, descriptor)]
        docs.sort(key=position, reverse=reverse)

        if descriptor.start_after is not None:
            marker = (descriptor.start_after.value, str(descriptor.start_after.doc_id))
            docs = [d for d in docs if (position(d) < marker if reverse else position(d) > marker)]

        page = docs[: descriptor.limit]
        cursor = PageCursor(page[-1][field], str(page[-1]["id"])) if page else descriptor.start_after
        return CatalogPage(items=tuple(dict(d) for d in page), cursor=cursor)
