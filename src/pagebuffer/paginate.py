"""Drive a :class:`~pagebuffer.stream.PagedDuplexStream` over a whole document.

The stream itself never hands out its current page.  This module plays the
role of the caller that knows when rendering has finished: it writes and
commits each node, drains whatever pages became ready after every commit and,
once the nodes are exhausted, emits the still-open page as the final chunk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, List, TypeVar

from .segment import DocumentNode, Unit, segment_text
from .stream import DEFAULT_SIZE_LIMIT, PagedDuplexStream
from .utils.errors import PagingConfigError
from .utils.logging import get_logger

logger = get_logger(__name__)

NodeT = TypeVar("NodeT")


@dataclass(slots=True, frozen=True)
class Page(Generic[NodeT]):
    """A drained page and the last node whose text it contains."""

    index: int
    text: str
    last_node: NodeT | None


def _drain(stream: PagedDuplexStream, start_index: int, last_node: object) -> Iterator[Page]:
    index = start_index
    while (text := stream.read_page()) is not None:
        yield Page(index, text, last_node)
        index += 1


def iter_pages(
    nodes: Iterable[DocumentNode],
    *,
    size_limit: int | None = None,
    stream: PagedDuplexStream | None = None,
) -> Iterator[Page]:
    """Yield pages for ``nodes`` in order, including the final open page.

    ``stream`` may be supplied to reuse a preconfigured buffer, in which case
    its own limit applies and ``size_limit`` must be omitted.  Otherwise a new
    stream is created with ``size_limit`` (default
    :data:`~pagebuffer.stream.DEFAULT_SIZE_LIMIT`).
    :class:`~pagebuffer.utils.errors.OversizeCommitError` propagates from the
    node that cannot fit.

    Raises
    ------
    PagingConfigError
        If both ``stream`` and ``size_limit`` are given.
    """

    if stream is None:
        stream = PagedDuplexStream(DEFAULT_SIZE_LIMIT if size_limit is None else size_limit)
    elif size_limit is not None:
        raise PagingConfigError("pass either stream or size_limit, not both")
    index = 0
    for node in nodes:
        # a page closed by this commit ends with the previously committed node
        previous = stream.get_last_committed_node()
        stream.write_string(node.text)
        stream.commit(node)
        for page in _drain(stream, index, previous):
            logger.debug("page %d ready (%d chars)", page.index, len(page.text))
            index += 1
            yield page

    if stream.current_page:
        logger.debug("final page %d (%d chars)", index, len(stream.current_page))
        yield Page(index, stream.current_page, stream.get_last_committed_node())


def paginate_text(
    text: str,
    *,
    size_limit: int = DEFAULT_SIZE_LIMIT,
    unit: Unit = "line",
) -> List[Page]:
    """Segment ``text`` by ``unit`` and return every page."""

    nodes = segment_text(text, unit)
    pages = list(iter_pages(nodes, size_limit=size_limit))
    logger.info(
        "paginated %d chars in %d nodes into %d pages (limit %d)",
        len(text),
        len(nodes),
        len(pages),
        size_limit,
    )
    return pages


__all__ = ["Page", "iter_pages", "paginate_text"]
