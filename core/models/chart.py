# =============================================================================
# core/models/chart.py - Chart Data Schemas
# =============================================================================
# Chart endpoints return plain label -> total maps that the frontend draws
# directly:
# - BarChartResponse: one bar per month, chronological
# - PieChartResponse: one slice per category
#
# YearMonth is the month value type used by bar charts and budgets.
# =============================================================================

import calendar
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class YearMonth:
    """
    A calendar month, ordered chronologically.

    Example:
        ym = YearMonth.parse("2023-01")
        ym.first_day()  # date(2023, 1, 1)
        ym.last_day()   # date(2023, 1, 31)
        str(ym)         # "2023-01"
    """
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """
        Parse a "YYYY-MM" string.

        Raises:
            ValueError: If the value isn't a valid year-month
        """
        match = _YEAR_MONTH_RE.match(value.strip()) if isinstance(value, str) else None
        if not match:
            raise ValueError(f"Expected YYYY-MM, got {value!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


class BarChartResponse(BaseModel):
    """
    Monthly totals for a bar chart.

    Example:
        {"monthly_totals": {"janeiro 2023": "150.00", "fevereiro 2023": "80.50"}}
    """
    monthly_totals: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Month label -> total, in chronological order"
    )


class PieChartResponse(BaseModel):
    """
    Category totals for a pie chart.

    Example:
        {"category_totals": {"Alimentacao": "230.40", "Transporte": "90.00"}}
    """
    category_totals: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Category label -> total, ordered by label"
    )
