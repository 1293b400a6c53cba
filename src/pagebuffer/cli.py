"""Typer-based command line interface for the page buffer.

``paginate`` reads a text document, splits it into nodes, feeds them through a
:class:`~pagebuffer.stream.PagedDuplexStream` and writes one file per page.
``acl`` builds a server ACL record from globs and prints it as JSON.

Exit codes
----------
0 success
3 I/O error (unsupported extension, undecodable input, filesystem issues)
4 configuration error
5 a single node is larger than the page size limit
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError

from .acl import ServerAcl
from .config import ConfigModel, load_config
from .io import read_file, write_pages
from .paginate import iter_pages
from .segment import segment_text
from .utils.errors import OversizeCommitError, UnsupportedFormatError
from .utils.logging import configure_logging
from .utils.tracing import set_tracing

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="pagebuffer",
    help="Split text into size-limited pages. Use 'pagebuffer paginate' to write pages.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _apply_overrides(
    cfg: ConfigModel,
    *,
    size_limit: int | None,
    unit: str | None,
    trace: bool | None,
) -> ConfigModel:
    """Return a validated copy of ``cfg`` with CLI overrides applied."""

    data = cfg.model_dump()
    if size_limit is not None:
        data["paging"]["size_limit"] = size_limit
    if unit is not None:
        data["segmentation"]["unit"] = unit
    if trace is not None:
        data["logging"]["trace"] = trace
    return ConfigModel.model_validate(data)


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


@app.callback()
def main() -> None:
    """Entry point for the pagebuffer command group."""
    pass


@app.command()
def paginate(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Input document (.txt or .md)"
    ),
    out_dir: Path = typer.Option(..., "--out-dir", help="Directory for page files"),  # noqa: B008
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    size_limit: Optional[int] = typer.Option(  # noqa: B008
        None, "--size-limit", help="Maximum characters per page"
    ),
    unit: Optional[str] = typer.Option(  # noqa: B008
        None, "--unit", help="Commit unit [line|paragraph|sentence]"
    ),
    encoding_in: str = typer.Option("utf-8-sig", help="Input file encoding"),  # noqa: B008
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit minimal progress messages to stderr"
    ),
    trace: bool | None = typer.Option(  # noqa: B008
        None, "--trace/--no-trace", help="Log every buffer call at DEBUG level"
    ),
) -> list[str]:
    """Paginate ``in_path`` writing one file per page into ``out_dir``."""

    try:
        cfg = _apply_overrides(
            load_config(config_path), size_limit=size_limit, unit=unit, trace=trace
        )
    except (ValidationError, OSError, ValueError, yaml.YAMLError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])

    configure_logging("DEBUG" if cfg.logging.trace else cfg.logging.level)
    set_tracing(cfg.logging.trace)
    if verbose:
        typer.echo(f"Loaded config (size_limit={cfg.paging.size_limit})", err=True)

    try:
        text = read_file(in_path, encoding=encoding_in)
    except (FileNotFoundError, UnsupportedFormatError, UnicodeDecodeError, OSError) as exc:
        _safe_exit(3, str(exc))
    if verbose:
        typer.echo(f"Read {len(text)} chars", err=True)

    nodes = segment_text(text, cfg.segmentation.unit)
    try:
        with Timing() as t_page:
            pages = [p.text for p in iter_pages(nodes, size_limit=cfg.paging.size_limit)]
    except OversizeCommitError as exc:
        _safe_exit(5, str(exc))
    finally:
        set_tracing(False)
    if verbose:
        typer.echo(
            f"Paginated {len(nodes)} nodes into {len(pages)} pages in {t_page.ms:.1f} ms",
            err=True,
        )

    try:
        written = write_pages(out_dir, pages, template=cfg.output.page_template)
    except OSError as exc:
        _safe_exit(3, str(exc))
    if verbose:
        typer.echo(f"Wrote {len(written)} pages to {out_dir}", err=True)

    return [str(p) for p in written]


@app.command()
def acl(
    homeserver: str = typer.Option(..., "--homeserver", help="Our own server name"),
    allow: List[str] = typer.Option([], "--allow", help="Allow glob (repeatable)"),  # noqa: B008
    deny: List[str] = typer.Option([], "--deny", help="Deny glob (repeatable)"),  # noqa: B008
    allow_ip: bool = typer.Option(  # noqa: B008
        False, "--allow-ip/--deny-ip", help="Allow IP literal server names"
    ),
    safe: bool = typer.Option(  # noqa: B008
        False, "--safe", help="Drop deny globs matching the homeserver"
    ),
) -> None:
    """Print the ACL content record for the given globs as JSON."""

    server_acl = ServerAcl(homeserver).set_allowed_servers(allow).set_denied_servers(deny)
    if allow_ip:
        server_acl.allow_ip_addresses()
    content = server_acl.safe_acl_content() if safe else server_acl.literal_acl_content()
    typer.echo(json.dumps(content.model_dump(), sort_keys=True))


__all__ = ["app"]
