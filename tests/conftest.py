"""Shared pytest fixtures for pagebuffer tests."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from pagebuffer.utils.logging import ROOT_LOGGER_NAME
from pagebuffer.utils.tracing import set_tracing


@pytest.fixture(autouse=True)
def _reset_package_logging() -> Iterator[None]:
    yield
    set_tracing(False)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
