"""Data models for credit report entries, tracked debts and derived results."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class ComparisonStatus(Enum):
    """Outcome of comparing a credit report entry with the tracked debts."""

    MATCHED = "matched"
    UNMATCHED = "unmatched"
    DISCREPANCY = "discrepancy"


class AlertType(Enum):
    """Kinds of alert derived from the debt list."""

    PROMO_ENDING = "promo_ending"
    PAYMENT_DUE = "payment_due"
    HIGH_APR = "high_apr"
    MONTHLY_PAYMENTS = "monthly_payments"
    UPCOMING_PAYMENTS = "upcoming_payments"


class AlertSeverity(Enum):
    """Alert severity, declared in display order (most severe first)."""

    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return list(AlertSeverity).index(self)


@dataclass(frozen=True)
class CreditEntry:
    """
    An account record imported from an external credit report.

    Entries are immutable once loaded. ``matched_debt_id`` holds an explicit
    link to a tracked debt, persisted by a previous ``LinkDebt`` command.
    """

    id: str
    name: str
    balance: Decimal
    lender: Optional[str] = None
    matched_debt_id: Optional[str] = None

    # Fields carried from the report but not used for matching
    type: str = "other"
    credit_limit: Optional[Decimal] = None
    monthly_payment: Optional[Decimal] = None
    account_status: str = "open"
    notes: Optional[str] = None


@dataclass(frozen=True)
class Debt:
    """
    A liability tracked within the application.

    Only ``id``, ``name``, ``lender`` and ``balance`` take part in
    reconciliation; the rest feed the alert and summary derivations.
    """

    id: str
    name: str
    balance: Decimal
    lender: Optional[str] = None
    type: str = "other"

    apr: Decimal = Decimal("0")
    is_promo_0: bool = False
    promo_end_date: Optional[date] = None
    payment_day: Optional[int] = None
    minimum_payment: Decimal = Decimal("0")
    planned_payment: Optional[Decimal] = None
    starting_balance: Optional[Decimal] = None
    created_at: Optional[date] = None


@dataclass(frozen=True)
class ComparisonResult:
    """Result of reconciling one credit entry. Built fresh on every pass."""

    credit_entry: CreditEntry
    matched_debt: Optional[Debt]
    status: ComparisonStatus

    # Absolute balance difference, set only for discrepancies
    balance_diff: Optional[Decimal] = None

    # Name of the strategy that produced the match
    match_rule: Optional[str] = None

    @property
    def is_explicit_link(self) -> bool:
        """True when the match came from a persisted link rather than a heuristic."""
        return (
            self.matched_debt is not None
            and self.credit_entry.matched_debt_id == self.matched_debt.id
        )


@dataclass
class ReconciliationReport:
    """Stable partition of comparison results for reporting."""

    results: list[ComparisonResult] = field(default_factory=list)
    discrepancies: list[ComparisonResult] = field(default_factory=list)
    unmatched: list[ComparisonResult] = field(default_factory=list)
    matched: list[ComparisonResult] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """An empty report is suppressed entirely rather than shown empty."""
        return not self.results

    @property
    def total_discrepancy(self) -> Decimal:
        """Sum of absolute balance differences across discrepancies."""
        return sum(
            (r.balance_diff for r in self.discrepancies if r.balance_diff is not None),
            Decimal("0"),
        )

    @property
    def match_rate(self) -> float:
        """Percentage of credit entries that found a tracked debt."""
        if not self.results:
            return 0.0
        found = len(self.matched) + len(self.discrepancies)
        return (found / len(self.results)) * 100


@dataclass(frozen=True)
class Alert:
    """An alert derived from the debt list and the current date."""

    id: str
    type: AlertType
    title: str
    description: str
    severity: AlertSeverity
    debt_id: Optional[str] = None


@dataclass(frozen=True)
class SavingsAccount:
    id: str
    name: str
    balance: Decimal
    provider: Optional[str] = None
    aer: Decimal = Decimal("0")


@dataclass(frozen=True)
class IncomeSource:
    id: str
    name: str
    monthly_amount: Decimal


@dataclass(frozen=True)
class ExpenseItem:
    id: str
    name: str
    monthly_amount: Decimal
    category: Optional[str] = None
    provider: Optional[str] = None


@dataclass(frozen=True)
class FinanceSummary:
    """Headline totals shown on the overview."""

    total_debts: Decimal
    total_savings: Decimal
    monthly_incoming: Decimal
    monthly_outgoings: Decimal
    # Balances less the scheduled payments due since each debt was recorded
    adjusted_total_debts: Decimal

    @property
    def net_position(self) -> Decimal:
        """Savings minus debts."""
        return self.total_savings - self.total_debts

    @property
    def monthly_surplus(self) -> Decimal:
        """Monthly incoming minus monthly outgoings."""
        return self.monthly_incoming - self.monthly_outgoings
