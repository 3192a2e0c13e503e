"""
Abstract persistence interface.

Supplies the collections the reconciler reads and carries out the commands
it raises. Implementations own all mutation; cached reads must be dropped
explicitly through ``invalidate`` after a write.
"""

from abc import ABC, abstractmethod

from ..commands import AddToDebts, Command, LinkDebt
from ..models.finance import CreditEntry, Debt


class PersistenceGateway(ABC):
    """Interface between the reconciliation core and stored data."""

    @abstractmethod
    def load_credit_entries(self) -> list[CreditEntry]:
        """Return the credit report entries, in display order."""
        pass

    @abstractmethod
    def load_debts(self) -> list[Debt]:
        """Return the tracked debts, in display order."""
        pass

    @abstractmethod
    def link_debt(self, entry_id: str, debt_id: str) -> CreditEntry:
        """
        Persist an explicit link from a credit entry to a debt.

        Returns:
            The updated credit entry

        Raises:
            EntryNotFoundError: If either id is unknown
        """
        pass

    @abstractmethod
    def add_to_debts(self, entry: CreditEntry) -> Debt:
        """
        Create a tracked debt from a credit entry.

        Returns:
            The created debt
        """
        pass

    @abstractmethod
    def invalidate(self) -> None:
        """Drop any cached collections so the next load reads fresh data."""
        pass

    def dispatch(self, command: Command) -> object:
        """Execute a command raised by a reconciliation."""
        if isinstance(command, LinkDebt):
            return self.link_debt(command.entry_id, command.debt_id)
        if isinstance(command, AddToDebts):
            return self.add_to_debts(command.entry)
        raise TypeError(f"Unsupported command: {command!r}")
