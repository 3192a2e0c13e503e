"""
Commands raised from a reconciliation for the persistence layer to carry out.

The reconciler only requests these; a ``PersistenceGateway`` executes them
and the next reconciliation pass picks up the result.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from .models.finance import CreditEntry, Debt, ReconciliationReport


@dataclass(frozen=True)
class LinkDebt:
    """Persist an explicit match between a credit entry and a debt."""

    entry_id: str
    debt_id: str


@dataclass(frozen=True)
class AddToDebts:
    """Materialize an unmatched credit entry as a new tracked debt."""

    entry: CreditEntry

    def to_debt(self, debt_id: str, created_at: Optional[date] = None) -> Debt:
        """
        Build the debt this command would create.

        Args:
            debt_id: Identifier for the new debt
            created_at: Date the balance is recorded

        Returns:
            New debt carrying the entry's name, lender, balance and type
        """
        entry = self.entry
        return Debt(
            id=debt_id,
            name=entry.name,
            balance=entry.balance,
            lender=entry.lender,
            type=entry.type,
            minimum_payment=entry.monthly_payment or Decimal("0"),
            starting_balance=entry.balance,
            created_at=created_at,
        )


Command = Union[LinkDebt, AddToDebts]


def pending_commands(report: ReconciliationReport) -> list[Command]:
    """
    Commands a user would be offered for a report.

    Heuristic matches (including discrepancies) can be confirmed as explicit
    links; unmatched entries can be added to the debts. Results already
    carrying an explicit link need nothing.
    """
    commands: list[Command] = []
    for result in report.results:
        if result.matched_debt is None:
            commands.append(AddToDebts(result.credit_entry))
        elif not result.is_explicit_link:
            commands.append(LinkDebt(result.credit_entry.id, result.matched_debt.id))
    return commands
