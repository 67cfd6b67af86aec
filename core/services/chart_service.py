# =============================================================================
# core/services/chart_service.py - Chart Aggregation
# =============================================================================
# Turns expense/income rows into chart data:
# - group_by_month: bar chart, one total per month, chronological
# - group_by_category: pie chart, one total per category label
#
# Rows come straight from the database (dicts with "date", "category",
# "amount"). Sums stay Decimal end to end; pandas only does the grouping.
# =============================================================================

import logging
from decimal import Decimal
from typing import Any, Iterable, Literal

import pandas as pd

from core.models.chart import YearMonth
from lib.utils import to_decimal

logger = logging.getLogger(__name__)

ChartLanguage = Literal["pt-BR", "en"]

MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "pt-BR": (
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ),
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}

ZERO = Decimal("0")


def month_label(year_month: YearMonth, language: ChartLanguage = "pt-BR") -> str:
    """
    Format a month as "<month name> <year>".

    Example:
        month_label(YearMonth(2023, 1))        # "janeiro 2023"
        month_label(YearMonth(2023, 1), "en")  # "January 2023"
    """
    names = MONTH_NAMES.get(language, MONTH_NAMES["pt-BR"])
    return f"{names[year_month.month - 1]} {year_month.year}"


def _decimal_sum(values: Iterable[Any]) -> Decimal:
    return sum((to_decimal(v) for v in values), ZERO)


def _to_frame(rows: list[dict[str, Any]], key: str) -> pd.DataFrame:
    frame = pd.DataFrame(rows)
    missing = {key, "amount"} - set(frame.columns)
    if missing:
        raise ValueError(f"Rows are missing columns: {sorted(missing)}")
    frame = frame[[key, "amount"]].copy()
    frame["amount"] = frame["amount"].map(to_decimal)
    return frame


def group_by_month(
    rows: list[dict[str, Any]],
    language: ChartLanguage = "pt-BR",
) -> dict[str, Decimal]:
    """
    Sum amounts per calendar month.

    Args:
        rows: Records with "date" (date or ISO string) and "amount"
        language: Month label language

    Returns:
        Ordered dict of month label -> total, oldest month first.
        Months without records are not included.
    """
    if not rows:
        return {}

    frame = _to_frame(rows, "date")
    frame["month"] = pd.to_datetime(frame["date"]).dt.to_period("M")

    totals = frame.groupby("month", sort=True)["amount"].agg(_decimal_sum)

    result = {
        month_label(YearMonth(period.year, period.month), language): total
        for period, total in totals.items()
    }
    logger.debug(f"Grouped {len(rows)} rows into {len(result)} months")
    return result


def group_by_category(rows: list[dict[str, Any]]) -> dict[str, Decimal]:
    """
    Sum amounts per category label.

    Args:
        rows: Records with "category" and "amount"

    Returns:
        Ordered dict of category -> total, sorted by category.
    """
    if not rows:
        return {}

    frame = _to_frame(rows, "category")
    frame["category"] = frame["category"].astype(str)

    totals = frame.groupby("category", sort=True)["amount"].agg(_decimal_sum)

    result = {str(category): total for category, total in totals.items()}
    logger.debug(f"Grouped {len(rows)} rows into {len(result)} categories")
    return result


def total_amount(rows: list[dict[str, Any]]) -> Decimal:
    """Sum the "amount" of every row."""
    return _decimal_sum(row.get("amount", ZERO) for row in rows)
