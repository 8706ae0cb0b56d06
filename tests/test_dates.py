"""Tests for fintrack.dates pure functions."""

from datetime import date, datetime

import pytest

from fintrack.dates import MONTH_NAMES, format_display_date, format_timestamp, month_year_label, parse_month


class TestMonthYearLabel:
    """Tests for month_year_label."""

    def test_january_label(self) -> None:
        """Should use full month name and four-digit year."""
        assert month_year_label(date(2024, 1, 5)) == "January 2024"

    def test_december_label(self) -> None:
        """Should label the last month of the year."""
        assert month_year_label(date(2025, 12, 31)) == "December 2025"

    def test_all_months_of_year(self) -> None:
        """Should label all 12 months correctly."""
        labels = [month_year_label(date(2025, m, 1)) for m in range(1, 13)]

        assert labels == [f"{name} 2025" for name in MONTH_NAMES]

    def test_same_month_different_days_share_label(self) -> None:
        """Should give every day of a month the same label."""
        assert month_year_label(date(2024, 2, 1)) == month_year_label(date(2024, 2, 29))


class TestFormatting:
    """Tests for format_display_date and format_timestamp."""

    def test_display_date(self) -> None:
        """Should pad the day and abbreviate the month."""
        assert format_display_date(date(2024, 1, 5)) == "05 Jan 2024"

    def test_timestamp(self) -> None:
        """Should format to minutes."""
        assert format_timestamp(datetime(2024, 3, 1, 14, 5, 59)) == "2024-03-01 14:05"


class TestParseMonth:
    """Tests for parse_month."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("3", 3), ("03", 3), ("12", 12), ("March", 3), ("mar", 3), ("DECEMBER", 12)],
    )
    def test_valid_months(self, value: str, expected: int) -> None:
        """Should accept numbers, names and abbreviations."""
        assert parse_month(value) == expected

    def test_month_out_of_range_raises_valueerror(self) -> None:
        """Should raise ValueError for month 13."""
        with pytest.raises(ValueError):
            parse_month("13")

    def test_zero_raises_valueerror(self) -> None:
        """Should raise ValueError for month 0."""
        with pytest.raises(ValueError):
            parse_month("0")

    def test_unknown_name_raises_valueerror(self) -> None:
        """Should raise ValueError for an unknown name."""
        with pytest.raises(ValueError):
            parse_month("Smarch")
