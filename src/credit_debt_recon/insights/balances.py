"""Payment date and balance helpers shared by the alert and summary derivations."""

from calendar import monthrange
from datetime import date
from decimal import Decimal
from typing import Optional

from ..models.finance import Debt


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Return the (year, month) that lies ``months`` after the given month."""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def payment_date(year: int, month: int, payment_day: int) -> date:
    """
    The payment date for a month.

    A payment day past the end of a short month falls on its last day.
    """
    return date(year, month, min(payment_day, monthrange(year, month)[1]))


def next_payment_date(payment_day: int, today: date) -> date:
    """
    Next occurrence of a monthly payment day, counting today.

    Args:
        payment_day: Day of month (1-31)
        today: Reference date

    Returns:
        This month's payment date unless it has passed, else next month's
    """
    this_month = payment_date(today.year, today.month, payment_day)
    if this_month >= today:
        return this_month
    year, month = add_months(today.year, today.month, 1)
    return payment_date(year, month, payment_day)


def days_until(target: date, today: date) -> int:
    return (target - today).days


def scheduled_payment(debt: Debt) -> Decimal:
    """A positive planned payment, otherwise the minimum payment."""
    if debt.planned_payment is not None and debt.planned_payment > 0:
        return debt.planned_payment
    return debt.minimum_payment


def monthly_debt_payment(debt: Debt) -> Decimal:
    """
    Amount expected to be paid on a debt this month.

    Settled debts cost nothing.
    """
    if debt.balance <= 0:
        return Decimal("0")
    return scheduled_payment(debt)


def adjusted_balance(
    balance: Decimal,
    payment_day: Optional[int],
    monthly_payment: Decimal,
    created_at: Optional[date],
    today: date,
) -> tuple[Decimal, int]:
    """
    Estimate a balance assuming every payment due since creation was made.

    Args:
        balance: Balance recorded when the debt was created
        payment_day: Day of month payments fall on
        monthly_payment: Amount paid each month
        created_at: Date the balance was recorded, None if unknown
        today: Reference date

    Returns:
        Tuple of (adjusted balance never below zero, payments counted)
    """
    if not payment_day or monthly_payment <= 0 or created_at is None:
        return balance, 0

    year, month = created_at.year, created_at.month
    check = payment_date(year, month, payment_day)
    # Created on or after this month's payment day: first payment is next month
    if check <= created_at:
        year, month = add_months(year, month, 1)
        check = payment_date(year, month, payment_day)

    payments_made = 0
    while check <= today:
        payments_made += 1
        year, month = add_months(year, month, 1)
        check = payment_date(year, month, payment_day)

    remaining = balance - monthly_payment * payments_made
    return max(Decimal("0"), remaining), payments_made


def adjusted_debt_balance(debt: Debt, today: date) -> Decimal:
    """A debt's balance after the scheduled payments due since it was recorded."""
    balance, _ = adjusted_balance(
        debt.balance, debt.payment_day, scheduled_payment(debt), debt.created_at, today
    )
    return balance
