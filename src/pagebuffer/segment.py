"""Split raw text into document nodes.

The :func:`segment_text` helper cuts a document into the units that are
committed to a :class:`~pagebuffer.stream.PagedDuplexStream` one at a time.
Nodes use half‑open ``[start, end)`` offsets into the original string and,
unlike a display oriented splitter, keep every separator character so that
joining the node texts reproduces the input exactly.

Supported units:

``line``
    One node per line including its ``\\n``, ``\\r\\n`` or ``\\r`` ending.
``paragraph``
    Runs of non-blank lines; trailing blank lines stay with the paragraph
    they follow.
``sentence``
    Conservative splitting on ``[.!?]`` followed by whitespace and an
    upper‑case letter, guarded by a short abbreviation list.  Whitespace after
    the terminator belongs to the preceding sentence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Literal

Unit = Literal["line", "paragraph", "sentence"]

_ABBREVIATIONS = {
    "Mr.",
    "Ms.",
    "Mrs.",
    "Dr.",
    "St.",
    "No.",
    "Fig.",
    "Inc.",
    "Co.",
    "Ltd.",
    "Jr.",
    "Sr.",
    "U.S.",
    "e.g.",
    "i.e.",
    "etc.",
    "vs.",
}

_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")
_PARAGRAPH_RE = re.compile(r"(?:[ \t]*(?:\r\n|\r|\n))+")
_BREAK_RE = re.compile(r"\r\n|\r|\n")
_TERMINATOR_RE = re.compile(r"[.!?][\"')\]]*")
_FOLLOW_RE = re.compile(r"\s+(?=[A-Z])")
_STRIP_CHARS = "\"')]"


@dataclass(slots=True, frozen=True)
class DocumentNode:
    """A single committed unit of a document using half‑open offsets."""

    index: int
    start: int
    end: int
    text: str

    @property
    def length(self) -> int:
        return self.end - self.start


def _preceding_token(text: str, end: int) -> str:
    start = max(text.rfind(c, 0, end) for c in " \n\t\r") + 1
    return text[start:end].strip(_STRIP_CHARS)


def _line_bounds(text: str) -> List[tuple[int, int]]:
    return [(m.start(), m.end()) for m in _LINE_RE.finditer(text)]


def _paragraph_bounds(text: str) -> List[tuple[int, int]]:
    bounds: List[tuple[int, int]] = []
    start = 0
    for match in _PARAGRAPH_RE.finditer(text):
        # a single line break inside a paragraph is not a separator
        if len(_BREAK_RE.findall(match.group())) < 2:
            continue
        if match.end() > start:
            bounds.append((start, match.end()))
            start = match.end()
    if start < len(text):
        bounds.append((start, len(text)))
    return bounds


def _sentence_bounds(text: str) -> List[tuple[int, int]]:
    bounds: List[tuple[int, int]] = []
    start = 0
    for match in _TERMINATOR_RE.finditer(text):
        end = match.end()
        m = _FOLLOW_RE.match(text, end)
        if not m:
            continue
        if _preceding_token(text, end) in _ABBREVIATIONS:
            continue
        bounds.append((start, m.end()))
        start = m.end()
    if start < len(text):
        bounds.append((start, len(text)))
    return bounds


def segment_text(text: str, unit: Unit = "line") -> List[DocumentNode]:
    """Split ``text`` into :class:`DocumentNode` objects.

    ``"".join(n.text for n in segment_text(text, unit)) == text`` holds for
    every unit.  Empty input yields no nodes.

    Raises
    ------
    ValueError
        If ``unit`` is not one of ``line``, ``paragraph`` or ``sentence``.
    """

    if unit == "line":
        bounds = _line_bounds(text)
    elif unit == "paragraph":
        bounds = _paragraph_bounds(text)
    elif unit == "sentence":
        bounds = _sentence_bounds(text)
    else:
        raise ValueError(f"Unknown segmentation unit: {unit!r}")
    return [DocumentNode(i, s, e, text[s:e]) for i, (s, e) in enumerate(bounds)]


__all__ = ["DocumentNode", "Unit", "segment_text"]
