"""
Matching strategies for credit report reconciliation.
Each strategy implements one way of pairing a credit entry with a tracked debt.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from ..models.finance import CreditEntry, Debt


class MatchingStrategy(ABC):
    """Abstract base class for matching strategies."""

    name: str = "strategy"

    @abstractmethod
    def applies_to(self, entry: CreditEntry) -> bool:
        """
        Decide whether this strategy is responsible for the entry.

        The first strategy that applies decides the outcome for the entry,
        whether or not it finds a debt.

        Args:
            entry: Credit report entry being reconciled

        Returns:
            True if this strategy should handle the entry
        """
        pass

    @abstractmethod
    def find_match(
        self, entry: CreditEntry, debts: Sequence[Debt]
    ) -> Optional[Debt]:
        """
        Find the tracked debt for a credit entry.

        Args:
            entry: Credit report entry to match
            debts: Tracked debts, in the order they should be considered

        Returns:
            Matching debt or None
        """
        pass

    def describe_match(self, entry: CreditEntry, debt: Debt) -> str:
        """Short label recorded on the comparison result."""
        return self.name


class ExplicitLinkStrategy(MatchingStrategy):
    """
    Explicit link strategy - matches on a persisted ``matched_debt_id``.
    Takes precedence over every heuristic.
    """

    name = "explicit_link"

    def applies_to(self, entry: CreditEntry) -> bool:
        return bool(entry.matched_debt_id)

    def find_match(
        self, entry: CreditEntry, debts: Sequence[Debt]
    ) -> Optional[Debt]:
        """Find the debt with the linked id. A dangling link finds nothing."""
        return next((d for d in debts if d.id == entry.matched_debt_id), None)


# A heuristic predicate receives (entry, debt) and reports whether they pair up.
Predicate = Callable[[CreditEntry, Debt], bool]


def debt_name_in_entry_name(entry: CreditEntry, debt: Debt) -> bool:
    """Debt name is a case-insensitive substring of the entry name."""
    return debt.name.lower() in entry.name.lower()


def entry_name_in_debt_name(entry: CreditEntry, debt: Debt) -> bool:
    """Entry name is a case-insensitive substring of the debt name."""
    return entry.name.lower() in debt.name.lower()


def same_lender(entry: CreditEntry, debt: Debt) -> bool:
    """Both lenders are present and equal ignoring case."""
    if not entry.lender or not debt.lender:
        return False
    return entry.lender.lower() == debt.lender.lower()


DEFAULT_PREDICATES: tuple[tuple[str, Predicate], ...] = (
    ("debt_name_in_entry_name", debt_name_in_entry_name),
    ("entry_name_in_debt_name", entry_name_in_debt_name),
    ("same_lender", same_lender),
)


class HeuristicStrategy(MatchingStrategy):
    """
    Name/lender heuristic used when an entry carries no explicit link.

    Debts are scanned in sequence order and the first debt satisfying any
    predicate wins, so a debt earlier in the list that only shares a lender
    beats a later debt with a matching name.
    """

    name = "heuristic"

    def __init__(self, predicates: Sequence[tuple[str, Predicate]] = DEFAULT_PREDICATES):
        """
        Initialize with an ordered predicate list.

        Args:
            predicates: (name, predicate) pairs evaluated per debt
        """
        self.predicates = tuple(predicates)

    def applies_to(self, entry: CreditEntry) -> bool:
        return not entry.matched_debt_id

    def find_match(
        self, entry: CreditEntry, debts: Sequence[Debt]
    ) -> Optional[Debt]:
        """Return the first debt in order that satisfies any predicate."""
        for debt in debts:
            if self.matching_rule(entry, debt) is not None:
                return debt
        return None

    def describe_match(self, entry: CreditEntry, debt: Debt) -> str:
        rule = self.matching_rule(entry, debt)
        return f"{self.name}:{rule}" if rule else self.name

    def matching_rule(self, entry: CreditEntry, debt: Debt) -> Optional[str]:
        """Name of the first predicate pairing the entry with the debt, if any."""
        for rule_name, predicate in self.predicates:
            if predicate(entry, debt):
                return rule_name
        return None
