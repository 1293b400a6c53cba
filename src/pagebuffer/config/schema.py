"""Typed configuration schema and loader for the pagebuffer package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint, field_validator

SIZE_LIMIT_ENV = "PAGEBUFFER_SIZE_LIMIT"

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class PagingSettings(BaseModel):
    """Page size settings for :class:`~pagebuffer.stream.PagedDuplexStream`."""

    size_limit: conint(ge=1) = 20000

    model_config = ConfigDict(extra="forbid")


class SegmentationSettings(BaseModel):
    """How input text is split into document nodes before committing."""

    unit: Literal["line", "paragraph", "sentence"] = "line"

    model_config = ConfigDict(extra="forbid")


class OutputSettings(BaseModel):
    """Naming of page files written by the CLI."""

    page_template: str = "page-{index:04d}.txt"

    model_config = ConfigDict(extra="forbid")

    @field_validator("page_template")
    @classmethod
    def _check_template(cls, value: str) -> str:
        try:
            first = value.format(index=1)
            second = value.format(index=2)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"invalid page_template: {exc}") from exc
        if first == second:
            raise ValueError("page_template must contain an {index} field")
        return value


class LoggingSettings(BaseModel):
    """Log level and call tracing switch."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    trace: bool = False

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    paging: PagingSettings
    segmentation: SegmentationSettings
    output: OutputSettings
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    ``PAGEBUFFER_SIZE_LIMIT`` in ``env`` (defaults to ``os.environ``).
    """

    with (
        importlib_resources.files("pagebuffer.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    if environ.get(SIZE_LIMIT_ENV):
        merged = deep_merge_dicts(
            merged, {"paging": {"size_limit": environ[SIZE_LIMIT_ENV].strip()}}
        )

    return ConfigModel.model_validate(merged)


__all__ = [
    "ConfigModel",
    "PagingSettings",
    "SegmentationSettings",
    "OutputSettings",
    "LoggingSettings",
    "SIZE_LIMIT_ENV",
    "deep_merge_dicts",
    "load_config",
]
