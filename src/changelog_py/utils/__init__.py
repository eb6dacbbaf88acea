"""Small file and date helpers shared by the core."""

from __future__ import annotations

from changelog_py.utils.dates import compact_date, compact_time, format_date
from changelog_py.utils.files import file_size, read_text, write_text_atomic

__all__ = [
    "compact_date",
    "compact_time",
    "file_size",
    "format_date",
    "read_text",
    "write_text_atomic",
]
