# =============================================================================
# tests/test_chart_service.py - Chart Aggregation Tests
# =============================================================================
# Run with: pytest tests/test_chart_service.py -v
# =============================================================================

from datetime import date
from decimal import Decimal

import pytest

from core.models.chart import YearMonth
from core.services.chart_service import (
    group_by_category,
    group_by_month,
    month_label,
    total_amount,
)


def _row(day: str, category: str, amount) -> dict:
    return {"date": day, "category": category, "amount": amount}


@pytest.fixture
def rows():
    """Rows as PostgREST returns them: ISO dates, numeric as strings."""
    return [
        _row("2023-02-10", "Transporte", "40.00"),
        _row("2023-01-05", "Alimentacao", "100.50"),
        _row("2023-01-20", "Alimentacao", "49.50"),
        _row("2023-03-01", "Lazer", "0.10"),
        _row("2023-03-31", "Alimentacao", "0.20"),
    ]


class TestMonthLabel:

    def test_portuguese(self):
        assert month_label(YearMonth(2023, 1)) == "janeiro 2023"
        assert month_label(YearMonth(2023, 3), "pt-BR") == "março 2023"

    def test_english(self):
        assert month_label(YearMonth(2023, 12), "en") == "December 2023"


class TestGroupByMonth:
    """Tests for bar chart aggregation."""

    def test_totals_per_month(self, rows):
        result = group_by_month(rows)

        assert result == {
            "janeiro 2023": Decimal("150.00"),
            "fevereiro 2023": Decimal("40.00"),
            "março 2023": Decimal("0.30"),
        }

    def test_months_are_chronological(self, rows):
        """Input order doesn't matter; labels come out oldest first."""
        assert list(group_by_month(rows)) == ["janeiro 2023", "fevereiro 2023", "março 2023"]

    def test_year_boundary_order(self):
        rows = [
            _row("2024-01-02", "A", "1"),
            _row("2023-12-30", "A", "2"),
        ]
        assert list(group_by_month(rows, "en")) == ["December 2023", "January 2024"]

    def test_sums_are_exact_decimals(self, rows):
        """0.10 + 0.20 must be 0.30, not 0.30000000000000004."""
        assert group_by_month(rows)["março 2023"] == Decimal("0.30")

    def test_accepts_date_objects_and_floats(self):
        rows = [_row(date(2023, 5, 1), "A", 10.1), _row(date(2023, 5, 2), "A", Decimal("0.2"))]
        assert group_by_month(rows, "en") == {"May 2023": Decimal("10.3")}

    def test_empty_rows(self):
        assert group_by_month([]) == {}

    def test_missing_column_raises(self):
        with pytest.raises(ValueError):
            group_by_month([{"date": "2023-01-01"}])


class TestGroupByCategory:
    """Tests for pie chart aggregation."""

    def test_totals_per_category(self, rows):
        result = group_by_category(rows)

        assert result == {
            "Alimentacao": Decimal("150.20"),
            "Lazer": Decimal("0.10"),
            "Transporte": Decimal("40.00"),
        }

    def test_categories_sorted(self, rows):
        assert list(group_by_category(rows)) == ["Alimentacao", "Lazer", "Transporte"]

    def test_empty_rows(self):
        assert group_by_category([]) == {}


class TestTotalAmount:

    def test_sum(self, rows):
        assert total_amount(rows) == Decimal("190.30")

    def test_empty(self):
        assert total_amount([]) == Decimal("0")
