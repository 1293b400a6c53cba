"""Allow ``python -m pagebuffer``."""

from .cli import app

app()
