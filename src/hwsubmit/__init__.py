"""hwsubmit: collect, review and submit one homework deliverable."""

from __future__ import annotations

__version__ = "0.3.0"

__all__ = ["cli", "config", "errors", "io", "submit"]
