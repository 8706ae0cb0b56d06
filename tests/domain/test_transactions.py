"""Tests for fintrack.domain.transactions pure functions."""

from datetime import date

import pytest

from fintrack.domain.models import (
    Category,
    FilterCriteria,
    Money,
    SortField,
    SortOrder,
    SortSpec,
    Transaction,
    TransactionType,
)
from fintrack.domain.transactions import (
    build_filter_criteria,
    build_transaction_input,
    filter_transactions,
    format_money,
    matches_criteria,
    merge_update,
    sign_marker,
    signed_amount,
    sort_transactions,
)
from fintrack.errors import ValidationError


class TestFilterTransactions:
    """Tests for filter_transactions."""

    def test_no_criteria_matches_all(self, scenario: tuple[Transaction, ...]) -> None:
        """Should return every transaction when nothing is specified."""
        assert filter_transactions(scenario, FilterCriteria()) == scenario

    def test_filter_by_category(self, scenario: tuple[Transaction, ...]) -> None:
        """Should keep only the Food transactions."""
        result = filter_transactions(scenario, FilterCriteria(category=Category.FOOD))

        assert [t.id for t in result] == ["jan-food", "feb-food"]
        assert sum(t.amount for t in result) == Money(15000)
        assert all(t.transaction_type == TransactionType.EXPENSE for t in result)

    def test_filter_by_type(self, scenario: tuple[Transaction, ...]) -> None:
        """Should keep only income."""
        result = filter_transactions(scenario, FilterCriteria(transaction_type=TransactionType.INCOME))

        assert [t.id for t in result] == ["jan-salary"]

    def test_filter_by_exact_date(self, scenario: tuple[Transaction, ...]) -> None:
        """Should match the calendar date exactly."""
        result = filter_transactions(scenario, FilterCriteria(on_date=date(2024, 2, 1)))

        assert [t.id for t in result] == ["feb-food"]

    def test_filter_by_year_and_month(self, make_transaction) -> None:
        """Should AND year and month."""
        txns = (
            make_transaction(created_at="2023-01-15", id="a"),
            make_transaction(created_at="2024-01-15", id="b"),
            make_transaction(created_at="2024-03-15", id="c"),
        )

        assert [t.id for t in filter_transactions(txns, FilterCriteria(year=2024))] == ["b", "c"]
        assert [t.id for t in filter_transactions(txns, FilterCriteria(month=1))] == ["a", "b"]
        assert [t.id for t in filter_transactions(txns, FilterCriteria(year=2024, month=1))] == ["b"]

    def test_no_match_returns_empty_tuple(self, scenario: tuple[Transaction, ...]) -> None:
        """Should return an empty tuple, not fail."""
        assert filter_transactions(scenario, FilterCriteria(category=Category.RENT)) == ()

    @pytest.mark.parametrize(
        "criteria",
        [
            FilterCriteria(category=Category.FOOD, month=1),
            FilterCriteria(transaction_type=TransactionType.EXPENSE, year=2024),
            FilterCriteria(on_date=date(2024, 1, 10), category=Category.SALARY),
            FilterCriteria(year=2023),
        ],
    )
    def test_partition_property(self, scenario: tuple[Transaction, ...], criteria: FilterCriteria) -> None:
        """Should keep exactly the transactions that satisfy every predicate."""
        kept = filter_transactions(scenario, criteria)
        dropped = [t for t in scenario if t not in kept]

        assert all(matches_criteria(t, criteria) for t in kept)
        assert not any(matches_criteria(t, criteria) for t in dropped)


class TestSortTransactions:
    """Tests for sort_transactions."""

    def test_amount_descending(self, scenario: tuple[Transaction, ...]) -> None:
        """Should order by amount, largest first."""
        result = sort_transactions(scenario, SortSpec(SortField.AMOUNT, SortOrder.DESC))

        assert [t.amount for t in result] == [Money(50000), Money(10000), Money(5000)]

    def test_date_ascending(self, scenario: tuple[Transaction, ...]) -> None:
        """Should order by date, oldest first."""
        result = sort_transactions(scenario, SortSpec(SortField.DATE, SortOrder.ASC))

        assert [t.id for t in result] == ["jan-food", "jan-salary", "feb-food"]

    def test_does_not_mutate_input(self, scenario: tuple[Transaction, ...]) -> None:
        """Should return a new sequence and leave the input alone."""
        original = list(scenario)
        sort_transactions(original, SortSpec(SortField.AMOUNT, SortOrder.DESC))

        assert original == list(scenario)

    def test_stable_for_equal_keys_both_directions(self, make_transaction) -> None:
        """Should keep input order among equal amounts in both directions."""
        txns = (
            make_transaction(amount="10", id="first"),
            make_transaction(amount="20", id="big"),
            make_transaction(amount="10", id="second"),
            make_transaction(amount="10", id="third"),
        )

        ascending = sort_transactions(txns, SortSpec(SortField.AMOUNT, SortOrder.ASC))
        descending = sort_transactions(ascending, SortSpec(SortField.AMOUNT, SortOrder.DESC))
        back = sort_transactions(descending, SortSpec(SortField.AMOUNT, SortOrder.ASC))

        assert [t.id for t in ascending] == ["first", "second", "third", "big"]
        assert [t.id for t in descending] == ["big", "first", "second", "third"]
        assert [t.id for t in back] == [t.id for t in ascending]

    def test_same_date_keeps_input_order(self, make_transaction) -> None:
        """Should not reorder transactions on the same date."""
        txns = (
            make_transaction(created_at="2024-01-05", id="x"),
            make_transaction(created_at="2024-01-05", id="y"),
        )

        result = sort_transactions(txns, SortSpec(SortField.DATE, SortOrder.DESC))

        assert [t.id for t in result] == ["x", "y"]

    def test_empty_input(self) -> None:
        """Should return an empty tuple."""
        assert sort_transactions([], SortSpec()) == ()


class TestFormatting:
    """Tests for format_money, sign_marker and signed_amount."""

    def test_format_money_two_digits(self) -> None:
        """Should render two fractional digits with grouping."""
        assert format_money(Money(123450)) == "Rs. 1,234.50"

    def test_format_money_custom_currency(self) -> None:
        """Should use the given currency prefix."""
        assert format_money(Money(5), "EUR") == "EUR 0.05"

    def test_format_money_with_sign(self) -> None:
        """Should prefix + or - with magnitude after the currency."""
        assert format_money(Money(-15000), include_sign=True) == "-Rs. 150.00"
        assert format_money(Money(35000), include_sign=True) == "+Rs. 350.00"

    def test_zero_is_non_negative(self) -> None:
        """Should treat zero as non-negative."""
        assert sign_marker(Money(0)) == ("+", "green")

    def test_negative_is_red(self) -> None:
        """Should mark negative amounts red."""
        assert sign_marker(Money(-1)) == ("-", "red")

    def test_signed_amount(self, scenario: tuple[Transaction, ...]) -> None:
        """Should negate expenses only."""
        assert [signed_amount(t) for t in scenario] == [Money(-10000), Money(50000), Money(-5000)]


class TestBuildTransactionInput:
    """Tests for build_transaction_input."""

    def test_valid_input(self) -> None:
        """Should build a validated input."""
        result = build_transaction_input("12.50", "food", "2024-01-05", "expense", "  Lunch ")

        assert result.amount == Money(1250)
        assert result.category == Category.FOOD
        assert result.created_at == date(2024, 1, 5)
        assert result.transaction_type == TransactionType.EXPENSE
        assert result.description == "Lunch"

    def test_blank_description_becomes_none(self) -> None:
        """Should store a blank description as absent."""
        result = build_transaction_input("1", "Other", "2024-01-05", "Expense", "   ")

        assert result.description is None

    def test_missing_fields_reported_together(self) -> None:
        """Should report every missing required field."""
        with pytest.raises(ValidationError) as exc_info:
            build_transaction_input("", None, "", None)

        assert set(exc_info.value.errors) == {"amount", "category", "date", "type"}

    def test_negative_amount(self) -> None:
        """Should reject negative amounts."""
        with pytest.raises(ValidationError) as exc_info:
            build_transaction_input("-5", "Food", "2024-01-05", "Expense")

        assert exc_info.value.errors == {"amount": "must not be negative"}

    def test_unknown_category(self) -> None:
        """Should reject categories outside the enumeration."""
        with pytest.raises(ValidationError) as exc_info:
            build_transaction_input("5", "Travel", "2024-01-05", "Expense")

        assert "category" in exc_info.value.errors


class TestBuildFilterCriteria:
    """Tests for build_filter_criteria."""

    def test_all_blank_matches_all(self) -> None:
        """Should produce empty criteria."""
        assert build_filter_criteria() == FilterCriteria()
        assert build_filter_criteria(category="", month="") == FilterCriteria()

    def test_parses_every_field(self) -> None:
        """Should parse each raw value."""
        criteria = build_filter_criteria("rent", "2024-03-01", "Expense", 2024, "March")

        assert criteria == FilterCriteria(
            category=Category.RENT,
            on_date=date(2024, 3, 1),
            transaction_type=TransactionType.EXPENSE,
            year=2024,
            month=3,
        )

    def test_invalid_values(self) -> None:
        """Should collect every invalid value."""
        with pytest.raises(ValidationError) as exc_info:
            build_filter_criteria(category="Travel", month="13")

        assert set(exc_info.value.errors) == {"category", "month"}


class TestMergeUpdate:
    """Tests for merge_update."""

    def test_keeps_id_and_replaces_fields(self, scenario: tuple[Transaction, ...]) -> None:
        """Should replace every field but the id."""
        update = build_transaction_input("75", "Transport", "2024-02-02", "Expense")

        merged = merge_update(scenario[0], update)

        assert merged.id == "jan-food"
        assert merged.amount == Money(7500)
        assert merged.category == Category.TRANSPORT
        assert merged.created_at == date(2024, 2, 2)
        assert merged.description is None
