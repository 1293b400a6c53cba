"""Shared utilities: typed errors, logging helpers and call tracing."""
