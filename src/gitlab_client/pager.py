import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Generic, Iterator, Sequence, TypeVar

from .enums import PagerState
from .exc import ValidationError

if TYPE_CHECKING:
    from .api.base import AbstractApi


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One decoded HTTP response of a paginated collection."""

    items: list[T]
    page: int
    per_page: int
    total_items: int | None = None
    total_pages: int | None = None
    next_page: int | None = None

    @property
    def has_next(self) -> bool:
        return self.next_page is not None


@dataclass
class _Cursor:
    next_page: int = 1
    current_page: int | None = None
    total_items: int | None = None
    total_pages: int | None = None
    has_next: bool = True
    error: BaseException | None = field(default=None, repr=False)


class Pager(Generic[T]):
    """
    Stateful, forward-only cursor over a multi-page REST collection.

    Nothing is requested on construction. Pages are fetched one at a time,
    strictly in order, either manually through ``next_page()``, eagerly
    through ``all()`` or lazily through ``stream()``. The three share the
    same cursor, so a pager can only be walked once.

    A pager is not thread safe. Once it has failed every further call
    raises the error that failed it, and once it is exhausted every further
    ``next_page()`` returns an empty list without touching the network.
    """

    def __init__(
        self,
        api: "AbstractApi",
        decoder: Callable[[dict], T],
        items_per_page: int,
        path_segments: Sequence[Any],
        query_params: dict[str, Any] | None = None,
    ):
        """
        Args:
            api: Endpoint module used to issue the requests
            decoder: Turns one JSON object of the response into an item
            items_per_page: Page size sent as ``per_page``, fixed for the pager's lifetime
            path_segments: Resource path, identifiers included
            query_params: Extra query parameters sent with every page

        Raises:
            ValidationError: If items_per_page is not a positive int
        """
        if (
            isinstance(items_per_page, bool)
            or not isinstance(items_per_page, int)
            or items_per_page <= 0
        ):
            raise ValidationError(
                f"items_per_page must be a positive int, got {items_per_page!r}"
            )

        self._api = api
        self._decoder = decoder
        self._items_per_page = items_per_page
        self._path_segments = tuple(path_segments)
        self._query_params = dict(query_params or {})
        self._cursor = _Cursor()
        self._state = PagerState.CREATED
        self._logger = logging.getLogger(f"gitlab_client.{self.__class__.__name__}")

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def current_page(self) -> int | None:
        """Number of the most recently fetched page, None before the first fetch."""
        return self._cursor.current_page

    @property
    def next_page_number(self) -> int:
        """Page the next ``next_page()`` call requests. Starts at 1."""
        return self._cursor.next_page

    @property
    def total_items(self) -> int | None:
        return self._cursor.total_items

    @property
    def total_pages(self) -> int | None:
        return self._cursor.total_pages

    @property
    def state(self) -> PagerState:
        return self._state

    def has_next_page(self) -> bool:
        if self._state.is_terminal:
            return False
        return self._cursor.has_next

    def next_page(self) -> list[T]:
        """
        Fetch the next page and return its items.

        Returns:
            The items of the page, or an empty list once there are no more
            pages. In that case the pager becomes EXHAUSTED and no request
            is made.

        Raises:
            NetworkError: If the request got no response
            ApiError: If the server answered with a non-2xx status
            DeserializationError: If the response body could not be decoded
        """
        if self._state is PagerState.FAILED:
            raise self._cursor.error
        if self._state is PagerState.EXHAUSTED:
            return []
        if not self._cursor.has_next:
            self._state = PagerState.EXHAUSTED
            self._logger.debug(
                f"Exhausted {self._describe()} after {self._cursor.current_page} page(s)"
            )
            return []

        page_number = self._cursor.next_page
        self._state = PagerState.FETCHING
        try:
            page = self._api.fetch_page(
                self._decoder,
                self._path_segments,
                page=page_number,
                per_page=self._items_per_page,
                query_params=self._query_params,
            )
        except Exception as e:
            self._state = PagerState.FAILED
            self._cursor.error = e
            raise

        self._advance(page_number, page)
        self._state = PagerState.HAS_PAGE
        return page.items

    def all(self) -> list[T]:
        """
        Fetch every remaining page and return the items in fetch order.

        Fails fast: if any page fails the items gathered so far are
        discarded and the error is raised.
        """
        items: list[T] = []
        while True:
            page = self.next_page()
            if self._state is PagerState.EXHAUSTED:
                return items
            items.extend(page)

    def stream(self) -> Iterator[T]:
        """
        Lazily yield items, fetching a page only once the previous one has
        been consumed.
        """
        while True:
            page = self.next_page()
            if self._state is PagerState.EXHAUSTED:
                return
            yield from page

    def __iter__(self) -> Iterator[T]:
        return self.stream()

    def _advance(self, page_number: int, page: Page[T]) -> None:
        cursor = self._cursor
        cursor.current_page = page.page
        cursor.next_page = page_number + 1
        if page.per_page != self._items_per_page:
            # GitLab caps per_page server-side (100 by default)
            self._logger.warning(
                f"Requested {self._items_per_page} items per page of {self._describe()}, "
                f"server returned pages of {page.per_page}"
            )
        if page.total_items is not None:
            cursor.total_items = page.total_items
        if page.total_pages is not None:
            cursor.total_pages = page.total_pages

        reached_last = (
            cursor.total_pages is not None and page_number >= cursor.total_pages
        )
        cursor.has_next = bool(page.items) and page.has_next and not reached_last

        self._logger.debug(
            f"Fetched page {page_number} of {self._describe()}: "
            f"{len(page.items)} item(s), total_pages={cursor.total_pages}, "
            f"has_next={cursor.has_next}"
        )

    def _describe(self) -> str:
        return "/".join(str(s) for s in self._path_segments)

    def __repr__(self) -> str:
        return (
            f"Pager(path={self._describe()!r}, items_per_page={self._items_per_page}, "
            f"current_page={self._cursor.current_page}, state={self._state.value})"
        )
