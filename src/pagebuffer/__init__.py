"""Bounded-size text pagination.

:class:`PagedDuplexStream` groups committed text into pages no longer than a
configured limit and hands closed pages to a consumer in FIFO order.  The
surrounding modules segment documents into nodes, drive the stream over a
whole document, load configuration and expose a small CLI.
"""

from .acl import ServerAcl, ServerAclContent
from .paginate import Page, iter_pages, paginate_text
from .segment import DocumentNode, segment_text
from .stream import DEFAULT_SIZE_LIMIT, PagedDuplexStream
from .utils.errors import OversizeCommitError, PagingConfigError, PagingError

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_SIZE_LIMIT",
    "DocumentNode",
    "OversizeCommitError",
    "Page",
    "PagedDuplexStream",
    "PagingConfigError",
    "PagingError",
    "ServerAcl",
    "ServerAclContent",
    "__version__",
    "iter_pages",
    "paginate_text",
    "segment_text",
]
