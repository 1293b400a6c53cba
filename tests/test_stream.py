"""Tests for the core pagination buffer."""

from __future__ import annotations

import pytest

from pagebuffer.stream import DEFAULT_SIZE_LIMIT, PagedDuplexStream
from pagebuffer.utils.errors import OversizeCommitError, PagingConfigError, PagingError


def test_default_size_limit() -> None:
    assert PagedDuplexStream().size_limit == DEFAULT_SIZE_LIMIT == 20000


@pytest.mark.parametrize("limit", [0, -1, 2.5, True])
def test_invalid_size_limit(limit: object) -> None:
    with pytest.raises(PagingConfigError):
        PagedDuplexStream(limit)  # type: ignore[arg-type]


def test_write_string_chains_and_tracks_position() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(10)
    assert stream.write_string("ab").write_string("cde") is stream
    assert stream.get_position() == 5
    assert stream.current_page == ""
    stream.commit("n")
    assert stream.get_position() == 0


def test_writes_are_not_size_checked() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(3)
    stream.write_string("x" * 50)
    assert stream.get_position() == 50
    assert stream.is_page_and_buffer_over_size() is True


def test_worked_example() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(10)
    stream.write_string("abcde")
    stream.commit("nodeA")
    assert stream.current_page == "abcde"
    assert stream.peek_page() is None

    stream.write_string("fghij")
    assert stream.is_page_and_buffer_over_size() is False
    stream.commit("nodeB")
    assert stream.current_page == "abcdefghij"
    assert stream.read_page() is None

    stream.write_string("k")
    stream.commit("nodeC")
    assert stream.ready_count == 1
    assert stream.current_page == "k"
    assert stream.read_page() == "abcdefghij"
    assert stream.read_page() is None
    assert stream.get_last_committed_node() == "nodeC"


def test_oversize_commit_on_empty_page_leaves_state_unchanged() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(5)
    stream.write_string("abcdef")
    with pytest.raises(OversizeCommitError) as info:
        stream.commit("node")
    assert isinstance(info.value, PagingError)
    assert info.value.size == 6
    assert info.value.size_limit == 5
    assert stream.get_position() == 6
    assert stream.current_page == ""
    assert stream.ready_count == 0
    assert stream.get_last_committed_node() is None

    # retrying unchanged fails again
    with pytest.raises(OversizeCommitError):
        stream.commit("node")


def test_oversize_commit_on_filled_page_rolls_over() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(5)
    stream.write_string("ab").commit("a")
    stream.write_string("abcdefg").commit("b")
    assert stream.read_page() == "ab"
    assert stream.current_page == "abcdefg"


def test_exact_limit_stays_on_page() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(4)
    stream.write_string("abcd").commit("a")
    assert stream.ready_count == 0
    assert stream.current_page == "abcd"


def test_ensure_new_page_never_stacks_empty_pages() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(10)
    stream.ensure_new_page()
    stream.ensure_new_page()
    assert stream.ready_count == 0
    stream.write_string("a").commit("a")
    stream.ensure_new_page()
    stream.ensure_new_page()
    assert stream.ready_count == 1
    assert stream.current_page == ""


def test_peek_does_not_remove() -> None:
    stream: PagedDuplexStream[int] = PagedDuplexStream(2)
    for i, chunk in enumerate(["ab", "cd", "ef"]):
        stream.write_string(chunk).commit(i)
    assert stream.peek_page() == "ab"
    assert stream.peek_page() == "ab"
    assert stream.read_page() == "ab"
    assert stream.peek_page() == "cd"
    assert stream.read_page() == "cd"
    assert stream.peek_page() is None
    assert stream.current_page == "ef"


def test_last_committed_node_only_changes_on_commit() -> None:
    stream: PagedDuplexStream[object] = PagedDuplexStream(3)
    assert stream.get_last_committed_node() is None
    first, second = object(), object()
    stream.write_string("abc").commit(first)
    stream.write_string("d")
    assert stream.get_last_committed_node() is first
    stream.commit(second)
    stream.read_page()
    assert stream.get_last_committed_node() is second


def test_empty_commit_records_node() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(3)
    stream.commit("empty")
    assert stream.current_page == ""
    assert stream.get_last_committed_node() == "empty"


def test_len_counts_everything_held() -> None:
    stream: PagedDuplexStream[str] = PagedDuplexStream(3)
    stream.write_string("abc").commit("a")
    stream.write_string("de").commit("b")
    stream.write_string("f")
    assert len(stream) == 6
    assert "ready=1" in repr(stream)
