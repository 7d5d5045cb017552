"""Page accumulator: builds a stable, growing product list for one spec.

State machine:
    EMPTY → LOADING → READY ⇄ LOADING_MORE → ... → EXHAUSTED

- ``change_spec`` discards everything accumulated and loads the first page
  of the new spec.
- ``fetch_next`` appends the next page; it only acts from READY while more
  pages exist, so at most one fetch is ever in flight.
- Every fetch carries the spec version it was issued under. A result (or
  failure) that arrives after the spec changed is stale and is dropped
  without touching the current list.
- A failed or cancelled ``fetch_next`` returns to READY with the list and
  cursor intact; a failed or cancelled first page returns to EMPTY. Either
  way the error is re-raised so the caller can retry.
"""

from enum import Enum

from catalogue.listing.query import PageCursor, compose
from shared.config import get_settings
from shared.exceptions import CollaboratorError, StaleResultError
from shared.logging import get_logger

logger = get_logger(__name__)


class AccumulatorState(Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    LOADING_MORE = "loading_more"
    EXHAUSTED = "exhausted"


class PageAccumulator:
    def __init__(self, source, page_size=None):
        self._source = source
        self._page_size = page_size or get_settings().page_size
        self._spec = None
        self._version = 0
        self._items = []
        self._cursor = None
        self._has_more = True
        self._page_count = 0
        self._state = AccumulatorState.EMPTY

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def spec(self):
        return self._spec

    @property
    def items(self):
        return tuple(self._items)

    @property
    def has_more(self):
        return self._has_more

    @property
    def state(self):
        return self._state

    @property
    def cursor(self):
        return self._cursor

    @property
    def page_count(self):
        return self._page_count

    @property
    def is_loading(self):
        return self._state in (AccumulatorState.LOADING, AccumulatorState.LOADING_MORE)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    async def change_spec(self, spec):
        """Replace the spec and load its first page.

        Re-applying the current spec is a no-op unless nothing is loaded.
        Returns the items of the page that was appended.
        """
        if spec == self._spec and self._state is not AccumulatorState.EMPTY:
            return ()
        self._spec = spec
        return await self._load_first_page()

    async def reload(self):
        """Start the current spec over from its first page."""
        if self._spec is None:
            return ()
        return await self._load_first_page()

    async def fetch_next(self):
        """Append the next page. A no-op unless READY with more pages."""
        if self._state is not AccumulatorState.READY or not self._has_more:
            return ()
        self._state = AccumulatorState.LOADING_MORE
        return await self._fetch(self._version, fallback=AccumulatorState.READY)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    async def _load_first_page(self):
        self._version += 1
        self._items = []
        self._cursor = None
        self._has_more = True
        self._page_count = 0
        self._state = AccumulatorState.LOADING
        logger.debug("listing_reset", version=self._version)
        return await self._fetch(self._version, fallback=AccumulatorState.EMPTY)

    def _ensure_current(self, version):
        if version != self._version:
            raise StaleResultError(version, self._version)

    async def _fetch(self, version, fallback):
        descriptor = compose(self._spec, self._cursor, self._page_size)

        try:
            page = await self._source.fetch(descriptor)
        except CollaboratorError as exc:
            try:
                self._ensure_current(version)
            except StaleResultError:
                logger.debug("stale_failure_discarded", version=version, error=str(exc))
                return ()
            self._state = fallback
            logger.warning("listing_fetch_failed", version=version, state=fallback.value, error=str(exc))
            raise
        except BaseException as exc:
            # Cancelled or unexpected failure: release the in-flight slot
            if version == self._version:
                self._state = fallback
            logger.warning(
                "listing_fetch_aborted", version=version, state=self._state.value, error=type(exc).__name__
            )
            raise

        try:
            self._ensure_current(version)
        except StaleResultError as exc:
            logger.debug("stale_page_discarded", issued=exc.issued_version, current=exc.current_version)
            return ()

        self._items.extend(page.items)
        self._page_count += 1
        if page.items:
            last = page.items[-1]
            self._cursor = page.cursor or PageCursor(last.get(descriptor.ordering.field), str(last.get("id")))
        self._has_more = len(page.items) == descriptor.limit
        self._state = AccumulatorState.READY if self._has_more else AccumulatorState.EXHAUSTED

        logger.debug(
            "listing_page_appended",
            version=version,
            page=self._page_count,
            received=len(page.items),
            total=len(self._items),
            has_more=self._has_more,
        )
        return page.items
