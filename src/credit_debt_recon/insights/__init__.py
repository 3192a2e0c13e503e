"""Derivations over the tracked debts: alerts, summaries and balances."""

from .alerts import AlertEngine
from .balances import (
    adjusted_balance,
    adjusted_debt_balance,
    monthly_debt_payment,
    next_payment_date,
)
from .summary import summarize

__all__ = [
    "AlertEngine",
    "adjusted_balance",
    "adjusted_debt_balance",
    "monthly_debt_payment",
    "next_payment_date",
    "summarize",
]
