"""Tests for the server ACL value object."""

from __future__ import annotations

import pytest

from pagebuffer.acl import ServerAcl, ServerAclContent, glob_matches


@pytest.mark.parametrize(
    ("glob", "server", "expected"),
    [
        ("*", "example.org", True),
        ("*.example.org", "matrix.example.org", True),
        ("*.example.org", "example.org", False),
        ("EXAMPLE.org", "example.ORG", True),
        ("ex?mple.org", "example.org", True),
        ("ex?mple.org", "exmple.org", False),
        ("a.b", "axb", False),
    ],
)
def test_glob_matches(glob: str, server: str, expected: bool) -> None:
    assert glob_matches(glob, server) is expected


def test_literal_content_preserves_insertion_order() -> None:
    acl = ServerAcl("home.org").allow_server("b.org").allow_server("a.org").allow_server("b.org")
    acl.deny_server("*.bad.org")
    content = acl.literal_acl_content()
    assert content == ServerAclContent(
        allow=["b.org", "a.org"], deny=["*.bad.org"], allow_ip_literals=False
    )


def test_ip_toggle() -> None:
    acl = ServerAcl("home.org")
    assert acl.allow_ip_addresses().literal_acl_content().allow_ip_literals is True
    assert acl.deny_ip_addresses().literal_acl_content().allow_ip_literals is False


def test_safe_content_defaults_and_filters() -> None:
    acl = ServerAcl("home.org").set_denied_servers(["*.org", "evil.com", "home.*"])
    assert acl.safe_denied_servers() == ["evil.com"]
    content = acl.safe_acl_content()
    assert content.allow == ["*"]
    assert content.deny == ["evil.com"]
    # literal content is untouched
    assert acl.literal_acl_content().deny == ["*.org", "evil.com", "home.*"]


def test_setters_replace() -> None:
    acl = ServerAcl("home.org").allow_server("x.org").set_allowed_servers(["y.org"])
    assert acl.literal_acl_content().allow == ["y.org"]


def test_matches_ignores_order() -> None:
    acl = ServerAcl("home.org").set_allowed_servers(["a", "b"]).deny_server("c")
    assert acl.matches({"allow": ["b", "a"], "deny": ["c"], "allow_ip_literals": False})
    assert acl.matches(acl.literal_acl_content())


@pytest.mark.parametrize(
    "record",
    [
        None,
        {},
        {"allow": ["a"], "deny": ["c"], "allow_ip_literals": False},
        {"allow": ["a", "b"], "deny": ["d"], "allow_ip_literals": False},
        {"allow": ["a", "b"], "deny": ["c"], "allow_ip_literals": True},
        {"allow": ["a", "x"], "deny": ["c"], "allow_ip_literals": False},
    ],
)
def test_matches_rejects(record: object) -> None:
    acl = ServerAcl("home.org").set_allowed_servers(["a", "b"]).deny_server("c")
    assert acl.matches(record) is False  # type: ignore[arg-type]


def test_content_serializes() -> None:
    content = ServerAcl("home.org").allow_server("*").literal_acl_content()
    assert content.model_dump() == {"allow": ["*"], "deny": [], "allow_ip_literals": False}
