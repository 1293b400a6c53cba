"""Server access control list value object.

:class:`ServerAcl` collects allow and deny server globs plus a flag for IP
literal server names and renders them as a :class:`ServerAclContent` record,
the serializable shape stored in a room's ``m.room.server_acl`` state.  Globs
use ``*`` for any run of characters and ``?`` for exactly one, matched
case-insensitively against the whole server name.

Globs are kept in insertion order and duplicates are ignored, so rendering the
same ACL twice yields identical records.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict

from .utils.tracing import trace_sync


class ServerAclContent(BaseModel):
    """Serializable ACL record."""

    allow: list[str]
    deny: list[str]
    allow_ip_literals: bool

    model_config = ConfigDict(extra="ignore")


@lru_cache(maxsize=256)
def _compile_glob(glob: str) -> re.Pattern[str]:
    pattern = re.escape(glob).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(f"^{pattern}$", re.IGNORECASE)


def glob_matches(glob: str, server: str) -> bool:
    """Return ``True`` if ``server`` matches ``glob``."""

    return _compile_glob(glob).match(server) is not None


class ServerAcl:
    """Mutable builder for a server ACL owned by ``homeserver``."""

    def __init__(self, homeserver: str) -> None:
        self.homeserver = homeserver
        self._allowed: dict[str, None] = {}
        self._denied: dict[str, None] = {}
        self._allow_ips = False

    def __repr__(self) -> str:
        return (
            f"<ServerAcl homeserver={self.homeserver!r} allow={list(self._allowed)!r} "
            f"deny={list(self._denied)!r} allow_ip_literals={self._allow_ips}>"
        )

    @trace_sync("ServerAcl.safe_denied_servers")
    def safe_denied_servers(self) -> list[str]:
        """Return deny globs that would not ban our own homeserver."""

        return [glob for glob in self._denied if not glob_matches(glob, self.homeserver)]

    @trace_sync("ServerAcl.allow_ip_addresses")
    def allow_ip_addresses(self) -> "ServerAcl":
        self._allow_ips = True
        return self

    @trace_sync("ServerAcl.deny_ip_addresses")
    def deny_ip_addresses(self) -> "ServerAcl":
        self._allow_ips = False
        return self

    @trace_sync("ServerAcl.allow_server")
    def allow_server(self, glob: str) -> "ServerAcl":
        self._allowed[glob] = None
        return self

    @trace_sync("ServerAcl.set_allowed_servers")
    def set_allowed_servers(self, globs: Iterable[str]) -> "ServerAcl":
        self._allowed = dict.fromkeys(globs)
        return self

    @trace_sync("ServerAcl.deny_server")
    def deny_server(self, glob: str) -> "ServerAcl":
        self._denied[glob] = None
        return self

    @trace_sync("ServerAcl.set_denied_servers")
    def set_denied_servers(self, globs: Iterable[str]) -> "ServerAcl":
        self._denied = dict.fromkeys(globs)
        return self

    @trace_sync("ServerAcl.literal_acl_content")
    def literal_acl_content(self) -> ServerAclContent:
        """Return the ACL exactly as configured."""

        return ServerAclContent(
            allow=list(self._allowed),
            deny=list(self._denied),
            allow_ip_literals=self._allow_ips,
        )

    @trace_sync("ServerAcl.safe_acl_content")
    def safe_acl_content(self) -> ServerAclContent:
        """Return content that cannot lock out our own homeserver.

        An empty allow list becomes ``["*"]`` and deny globs matching
        ``homeserver`` are dropped.
        """

        return ServerAclContent(
            allow=list(self._allowed) or ["*"],
            deny=self.safe_denied_servers(),
            allow_ip_literals=self._allow_ips,
        )

    @trace_sync("ServerAcl.matches")
    def matches(self, acl: ServerAclContent | Mapping[str, Any] | None) -> bool:
        """Return ``True`` if ``acl`` holds the same globs and IP flag.

        Glob order is irrelevant.  A missing or empty record never matches.
        """

        if not acl:
            return False
        if isinstance(acl, ServerAclContent):
            allow, deny, ips = acl.allow, acl.deny, acl.allow_ip_literals
        else:
            allow = acl.get("allow") or []
            deny = acl.get("deny") or []
            ips = acl.get("allow_ip_literals")

        return (
            ips is self._allow_ips
            and _same_members(allow, self._allowed)
            and _same_members(deny, self._denied)
        )


def _same_members(entries: Iterable[str], current: Mapping[str, None]) -> bool:
    entries = list(entries)
    return len(entries) == len(current) and all(e in current for e in entries)


__all__ = ["ServerAcl", "ServerAclContent", "glob_matches"]
