"""Data models for reconciliation."""

from .finance import (
    Alert,
    AlertSeverity,
    AlertType,
    ComparisonResult,
    ComparisonStatus,
    CreditEntry,
    Debt,
    ExpenseItem,
    FinanceSummary,
    IncomeSource,
    ReconciliationReport,
    SavingsAccount,
)

__all__ = [
    "Alert",
    "AlertSeverity",
    "AlertType",
    "ComparisonResult",
    "ComparisonStatus",
    "CreditEntry",
    "Debt",
    "ExpenseItem",
    "FinanceSummary",
    "IncomeSource",
    "ReconciliationReport",
    "SavingsAccount",
]
