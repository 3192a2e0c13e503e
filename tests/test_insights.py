"""Tests for balance helpers and the finance summary."""

from datetime import date
from decimal import Decimal

import pytest

from credit_debt_recon.insights.balances import (
    add_months,
    adjusted_balance,
    monthly_debt_payment,
    next_payment_date,
)
from credit_debt_recon.insights.summary import summarize
from credit_debt_recon.models.finance import ExpenseItem, IncomeSource, SavingsAccount

from conftest import make_debt

TODAY = date(2026, 10, 18)


class TestPaymentDates:
    @pytest.mark.parametrize(
        "start, months, expected",
        [((2026, 10), 1, (2026, 11)), ((2026, 12), 1, (2027, 1)), ((2026, 11), 14, (2028, 1))],
    )
    def test_add_months(self, start, months, expected):
        assert add_months(*start, months) == expected

    def test_today_counts_as_next_payment(self):
        assert next_payment_date(18, TODAY) == TODAY

    def test_year_rollover(self):
        assert next_payment_date(5, date(2026, 12, 20)) == date(2027, 1, 5)

    def test_clamped_to_month_end(self):
        assert next_payment_date(30, date(2027, 2, 1)) == date(2027, 2, 28)


class TestAdjustedBalance:
    def test_counts_payments_since_creation(self):
        balance, made = adjusted_balance(
            Decimal("1000"), 15, Decimal("50"), date(2026, 1, 10), TODAY
        )

        assert made == 10
        assert balance == Decimal("500")

    def test_created_on_payment_day_starts_next_month(self):
        _, made = adjusted_balance(
            Decimal("1000"), 15, Decimal("50"), date(2026, 1, 15), TODAY
        )

        assert made == 9

    def test_never_below_zero(self):
        balance, made = adjusted_balance(
            Decimal("100"), 1, Decimal("80"), date(2026, 1, 10), TODAY
        )

        assert made == 9
        assert balance == Decimal("0")

    @pytest.mark.parametrize("payment_day, payment", [(None, "50"), (15, "0")])
    def test_unchanged_without_schedule(self, payment_day, payment):
        assert adjusted_balance(
            Decimal("1000"), payment_day, Decimal(payment), date(2026, 1, 10), TODAY
        ) == (Decimal("1000"), 0)

    def test_unknown_creation_date(self):
        assert adjusted_balance(Decimal("1000"), 15, Decimal("50"), None, TODAY) == (
            Decimal("1000"),
            0,
        )


class TestMonthlyDebtPayment:
    def test_planned_payment_preferred(self):
        debt = make_debt(balance=100, minimum_payment=20, planned_payment=50)
        assert monthly_debt_payment(debt) == Decimal("50")

    def test_minimum_when_no_plan(self):
        debt = make_debt(balance=100, minimum_payment=20)
        assert monthly_debt_payment(debt) == Decimal("20")

    def test_settled_debt(self):
        debt = make_debt(balance=0, minimum_payment=20)
        assert monthly_debt_payment(debt) == Decimal("0")


class TestSummary:
    def test_totals(self):
        debts = [
            make_debt("d1", balance=1000, minimum_payment=25),
            make_debt("d2", balance=500, minimum_payment=20, planned_payment=60),
        ]
        savings = [SavingsAccount("s1", "ISA", Decimal("2000"))]
        income = [IncomeSource("i1", "Salary", Decimal("2500"))]
        expenses = [
            ExpenseItem("e1", "Rent", Decimal("900")),
            ExpenseItem("e2", "Phone", Decimal("15.50")),
        ]

        result = summarize(debts, savings, income, expenses)

        assert result.total_debts == Decimal("1500")
        assert result.total_savings == Decimal("2000")
        assert result.net_position == Decimal("500")
        assert result.monthly_incoming == Decimal("2500")
        assert result.monthly_outgoings == Decimal("1000.50")
        assert result.monthly_surplus == Decimal("1499.50")

    def test_empty(self):
        result = summarize([])

        assert result.total_debts == Decimal("0")
        assert result.monthly_surplus == Decimal("0")

    def test_adjusted_total_debts(self):
        debts = [
            make_debt(
                "d1",
                balance=1000,
                payment_day=15,
                minimum_payment=25,
                planned_payment=50,
                created_at=date(2026, 1, 10),
            ),
            make_debt(
                "d2",
                balance=300,
                payment_day=1,
                minimum_payment=40,
                planned_payment=0,
                created_at=date(2026, 9, 1),
            ),
            make_debt("d3", balance=500, payment_day=1, minimum_payment=40),
        ]

        result = summarize(debts, today=TODAY)

        assert result.total_debts == Decimal("1800")
        assert result.adjusted_total_debts == Decimal("1260")
