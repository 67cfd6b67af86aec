# =============================================================================
# tests/test_income_service.py - Income Service Tests
# =============================================================================
# IncomeService shares its lifecycle with ExpenseService; these tests cover
# what differs (table, payment_origin, error types) and that the two never
# see each other's rows.
#
# Run with: pytest tests/test_income_service.py -v
# =============================================================================

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from app.exceptions import IncomeNotFoundError, InvalidDataError
from core.models.expense import ExpenseCreate
from core.models.income import IncomeCreate, IncomeUpdate
from core.services.expense_service import ExpenseService
from core.services.income_service import IncomeService


def _income(day="2023-01-05", category="SALARIO", amount="4500.00", **extra) -> IncomeCreate:
    return IncomeCreate(date=day, category=category, amount=amount, **extra)


class TestIncomeLifecycle:

    def test_create_with_payment_origin(self, user):
        income = IncomeService.create(_income(payment_origin="Empresa X"), user.id)

        assert income.payment_origin == "Empresa X"
        assert income.amount == Decimal("4500.00")

    def test_zero_amount_rejected(self, user):
        with pytest.raises(InvalidDataError) as exc_info:
            IncomeService.create(_income(amount="0"), user.id)

        assert "income" in exc_info.value.message

    def test_update_and_get(self, user):
        income = IncomeService.create(_income(), user.id)

        IncomeService.update(
            income.id,
            IncomeUpdate(date="2023-01-06", category="FREELANCE", amount="800", payment_origin="Cliente"),
            user_id=user.id,
        )

        fetched = IncomeService.get(income.id, user_id=user.id)
        assert fetched.category == "FREELANCE"
        assert fetched.payment_origin == "Cliente"

    def test_delete(self, user):
        income = IncomeService.create(_income(), user.id)
        IncomeService.delete(income.id, user_id=user.id)

        with pytest.raises(IncomeNotFoundError):
            IncomeService.list_by_user(user.id)

    def test_unknown_income(self):
        with pytest.raises(IncomeNotFoundError) as exc_info:
            IncomeService.get(uuid4())

        assert exc_info.value.code == "INCOME_NOT_FOUND"


class TestIncomeIsolation:
    """Expenses and incomes live in separate tables."""

    def test_expense_not_visible_as_income(self, user):
        expense = ExpenseService.create(
            ExpenseCreate(date="2023-01-10", category="Lazer", amount="10"), user.id
        )

        with pytest.raises(IncomeNotFoundError):
            IncomeService.get(expense.id)
        with pytest.raises(IncomeNotFoundError):
            IncomeService.list_by_user(user.id)


class TestIncomeCharts:

    def test_bar_and_pie(self, user):
        IncomeService.create(_income("2023-01-05", "SALARIO", "4500.00"), user.id)
        IncomeService.create(_income("2023-02-05", "SALARIO", "4500.00"), user.id)
        IncomeService.create(_income("2023-02-18", "FREELANCE", "750.50"), user.id)

        bar = IncomeService.bar_chart(user.id, "2023-01", "2023-02")
        pie = IncomeService.pie_chart(user.id, date(2023, 1, 1), date(2023, 2, 28))

        assert bar.monthly_totals == {
            "janeiro 2023": Decimal("4500.00"),
            "fevereiro 2023": Decimal("5250.50"),
        }
        assert pie.category_totals == {
            "FREELANCE": Decimal("750.50"),
            "SALARIO": Decimal("9000.00"),
        }

    def test_value_range(self, user):
        IncomeService.create(_income(amount="100"), user.id)
        IncomeService.create(_income(amount="5000"), user.id)

        found = IncomeService.find_by_value_range(user.id, Decimal("1000"), Decimal("10000"))
        assert [i.amount for i in found] == [Decimal("5000.00")]
