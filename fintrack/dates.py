"""Date utilities for fintrack.

Pure functions for month labels and date formatting.
"""

from datetime import date, datetime

# English month names regardless of the process locale
MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def month_year_label(day: date) -> str:
    """Label for the month a date falls in.

    Args:
        day: Any date in the month.

    Returns:
        Full month name and four-digit year (e.g., "March 2024").
    """
    return f"{MONTH_NAMES[day.month - 1]} {day.year:04d}"


def format_display_date(day: date) -> str:
    """Format a transaction date for tables and reports (e.g., "05 Jan 2024")."""
    return f"{day.day:02d} {MONTH_NAMES[day.month - 1][:3]} {day.year:04d}"


def format_timestamp(moment: datetime) -> str:
    """Format a generation timestamp (e.g., "2024-03-01 14:05")."""
    return moment.strftime("%Y-%m-%d %H:%M")


def parse_month(value: str) -> int:
    """Parse a month given as a number (1-12) or an English name.

    Args:
        value: "3", "03", "Mar" or "March" (case-insensitive).

    Returns:
        Month number 1-12.

    Raises:
        ValueError: If the value is not a month.
    """
    text = value.strip()
    if text.isdigit():
        number = int(text)
        if 1 <= number <= 12:
            return number
        raise ValueError(f"Month must be between 1 and 12, got {number}")

    for index, name in enumerate(MONTH_NAMES, 1):
        if text.lower() in (name.lower(), name[:3].lower()):
            return index
    raise ValueError(f"Unknown month '{value}'")
