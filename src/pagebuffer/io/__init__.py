"""Extension based registry for reading input documents and writing pages.

Plain-text readers are registered for ``.txt`` and ``.md``.  Reading performs
no newline translation so that page boundaries fall on the exact characters
found on disk.  ``UnsupportedFormatError`` is raised when no reader is
registered for a path's extension.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Iterable

from ..utils.errors import UnsupportedFormatError
from ..utils.logging import get_logger

logger = get_logger(__name__)

ReaderFunc = Callable[..., str]

_READERS: dict[str, ReaderFunc] = {}


def read_text(
    path: str | os.PathLike[str],
    *,
    encoding: str = "utf-8-sig",
    errors: str = "strict",
) -> str:
    """Read a text file as-is; a UTF-8 BOM is consumed by the default codec."""

    with open(path, "r", encoding=encoding, errors=errors, newline="") as f:
        return f.read()


def register_reader(ext: str, func: ReaderFunc) -> None:
    """Register ``func`` for files ending with ``ext`` (case-insensitive)."""

    _READERS[ext.lower()] = func


def get_extension(path: str | os.PathLike[str]) -> str:
    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def read_file(path: str | os.PathLike[str], **kwargs: Any) -> str:
    """Read ``path`` using the registered reader for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return reader(path, **kwargs)


def write_pages(
    out_dir: str | os.PathLike[str],
    pages: Iterable[str],
    *,
    template: str = "page-{index:04d}.txt",
    encoding: str = "utf-8",
) -> list[Path]:
    """Write each page to ``out_dir`` named by ``template`` (1-based index).

    The directory is created when missing.  Page text is written verbatim.
    """

    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for number, text in enumerate(pages, start=1):
        target = directory / template.format(index=number)
        with open(target, "w", encoding=encoding, newline="") as f:
            f.write(text)
        logger.debug("wrote %s (%d chars)", target, len(text))
        written.append(target)
    return written


register_reader(".txt", read_text)
register_reader(".md", read_text)

__all__ = [
    "ReaderFunc",
    "get_extension",
    "read_file",
    "read_text",
    "register_reader",
    "write_pages",
]
