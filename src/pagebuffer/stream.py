"""Bounded-size text pagination buffer.

:class:`PagedDuplexStream` accepts an unbounded stream of writes and groups
them into pages no longer than ``size_limit`` characters.  Text is first
written to an uncommitted accumulator; :meth:`PagedDuplexStream.commit` moves
the whole accumulator into the current page atomically, rolling over to a new
page first when the combined length would exceed the limit.

Pages are delivered by polling.  A page becomes *ready* once it is no longer
the current page; ready pages are kept in a FIFO queue and drained with
:meth:`~PagedDuplexStream.read_page`.  The current page is never returned by
``peek_page``/``read_page``.  Whoever drives the stream decides when rendering
has finished and reads the final chunk from :attr:`~PagedDuplexStream.current_page`.

Example
-------
>>> stream = PagedDuplexStream(size_limit=10)
>>> stream.write_string("abcdefghij").commit("a")
>>> stream.write_string("k").commit("b")
>>> stream.read_page()
'abcdefghij'
>>> stream.current_page
'k'
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Protocol, TypeVar

from .utils.errors import OversizeCommitError, PagingConfigError
from .utils.tracing import trace_sync

DEFAULT_SIZE_LIMIT = 20000


class DocumentNodeRef(Protocol):
    """Opaque reference to the document unit associated with a commit.

    The stream stores and returns it verbatim; no members are required.
    """


NodeT = TypeVar("NodeT", bound=DocumentNodeRef)


class PagedDuplexStream(Generic[NodeT]):
    """Accumulate text and split it into pages of at most ``size_limit`` chars."""

    def __init__(self, size_limit: int = DEFAULT_SIZE_LIMIT) -> None:
        if isinstance(size_limit, bool) or not isinstance(size_limit, int):
            raise PagingConfigError("size_limit must be an integer")
        if size_limit < 1:
            raise PagingConfigError("size_limit must be positive")
        self._size_limit = size_limit
        self._buffer = ""
        self._ready: Deque[str] = deque()
        self._current = ""
        self._last_committed_node: NodeT | None = None

    @property
    def size_limit(self) -> int:
        return self._size_limit

    @property
    def current_page(self) -> str:
        """Text committed to the open page so far."""

        return self._current

    @property
    def ready_count(self) -> int:
        """Number of closed pages waiting to be read."""

        return len(self._ready)

    def __len__(self) -> int:
        return sum(len(p) for p in self._ready) + len(self._current) + len(self._buffer)

    def __repr__(self) -> str:
        return (
            f"<PagedDuplexStream size_limit={self._size_limit} "
            f"ready={len(self._ready)} current={len(self._current)} "
            f"buffered={len(self._buffer)}>"
        )

    @trace_sync("PagedDuplexStream.write_string")
    def write_string(self, text: str) -> "PagedDuplexStream[NodeT]":
        """Append ``text`` to the accumulator.  Size is only checked on commit."""

        self._buffer += text
        return self

    @trace_sync("PagedDuplexStream.get_position")
    def get_position(self) -> int:
        """Return the length of the uncommitted accumulator."""

        return len(self._buffer)

    @trace_sync("PagedDuplexStream.is_page_and_buffer_over_size")
    def is_page_and_buffer_over_size(self) -> bool:
        return len(self._current) + len(self._buffer) > self._size_limit

    @trace_sync("PagedDuplexStream.ensure_new_page")
    def ensure_new_page(self) -> None:
        """Close the current page unless it is empty."""

        if self._current:
            self._ready.append(self._current)
            self._current = ""

    @trace_sync("PagedDuplexStream.commit")
    def commit(self, node: NodeT) -> None:
        """Move the accumulator into the current page and remember ``node``.

        When the current page plus the accumulator would exceed
        ``size_limit`` the current page is closed first.  A commit is never
        split across pages.

        Raises
        ------
        OversizeCommitError
            If the current page is empty and the accumulator alone is longer
            than ``size_limit``.  Nothing is modified in that case.
        """

        if self.is_page_and_buffer_over_size():
            if not self._current and len(self._buffer) > self._size_limit:
                raise OversizeCommitError(len(self._buffer), self._size_limit)
            self.ensure_new_page()
        self._current += self._buffer
        self._buffer = ""
        self._last_committed_node = node

    @trace_sync("PagedDuplexStream.get_last_committed_node")
    def get_last_committed_node(self) -> NodeT | None:
        return self._last_committed_node

    @trace_sync("PagedDuplexStream.peek_page")
    def peek_page(self) -> str | None:
        """Return the oldest ready page without removing it, or ``None``."""

        if not self._ready:
            return None
        return self._ready[0]

    @trace_sync("PagedDuplexStream.read_page")
    def read_page(self) -> str | None:
        """Remove and return the oldest ready page, or ``None``."""

        if not self._ready:
            return None
        return self._ready.popleft()


__all__ = ["DEFAULT_SIZE_LIMIT", "DocumentNodeRef", "PagedDuplexStream"]
