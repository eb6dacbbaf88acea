"""changelog-py: keep a structured, append-only changelog up to date."""

from __future__ import annotations

__version__ = "0.1.0"
