"""Telemetry helpers (logging)."""

from taskboard.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
