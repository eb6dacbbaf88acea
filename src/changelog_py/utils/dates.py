"""Date formatting for changelog headings and file names."""

from __future__ import annotations

from datetime import date, datetime


def format_date(fmt: str, today: date | None = None) -> str:
    """Render ``fmt`` replacing the ``YYYY``, ``MM`` and ``DD`` tokens.

    Args:
        fmt: Format string such as "YYYY-MM-DD" or "DD.MM.YYYY"
        today: Date to render, defaults to the local current date

    Returns:
        Formatted date string
    """
    day = today or date.today()
    return (
        fmt.replace("YYYY", f"{day.year:04d}")
        .replace("MM", f"{day.month:02d}")
        .replace("DD", f"{day.day:02d}")
    )


def compact_date(moment: date | datetime) -> str:
    """YYYYMMDD, used in backup and archive file names."""
    return moment.strftime("%Y%m%d")


def compact_time(moment: datetime) -> str:
    """HHMMSS, used in backup file names."""
    return moment.strftime("%H%M%S")
