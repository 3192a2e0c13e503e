"""Headline finance totals."""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..models.finance import Debt, ExpenseItem, FinanceSummary, IncomeSource, SavingsAccount
from .balances import adjusted_debt_balance


def _total(amounts) -> Decimal:
    return sum(amounts, Decimal("0"))


def summarize(
    debts: Sequence[Debt],
    savings: Sequence[SavingsAccount] = (),
    income: Sequence[IncomeSource] = (),
    expenses: Sequence[ExpenseItem] = (),
    today: Optional[date] = None,
) -> FinanceSummary:
    """
    Compute the finance summary.

    Monthly outgoings are expenses plus one payment per debt: the planned
    payment where one is recorded, otherwise the minimum payment. The
    adjusted debt total assumes every payment due up to ``today`` (default:
    the current date) was made.
    """
    today = today or date.today()
    debt_payments = _total(
        d.planned_payment if d.planned_payment is not None else d.minimum_payment
        for d in debts
    )
    return FinanceSummary(
        total_debts=_total(d.balance for d in debts),
        total_savings=_total(s.balance for s in savings),
        monthly_incoming=_total(i.monthly_amount for i in income),
        monthly_outgoings=_total(e.monthly_amount for e in expenses) + debt_payments,
        adjusted_total_debts=_total(adjusted_debt_balance(d, today) for d in debts),
    )
