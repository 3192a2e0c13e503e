"""
Reconciliation engine for credit report entries and tracked debts.
Applies matching strategies in precedence order and classifies each pairing.
"""

from decimal import Decimal
from typing import Optional, Sequence
import logging

from ..models.finance import (
    ComparisonResult,
    ComparisonStatus,
    CreditEntry,
    Debt,
    ReconciliationReport,
)
from .strategies import ExplicitLinkStrategy, HeuristicStrategy, MatchingStrategy

logger = logging.getLogger(__name__)

# Balances may differ by up to this many currency units before a match is
# reported as a discrepancy. Strictly greater is a discrepancy.
DISCREPANCY_TOLERANCE = Decimal("10")


class Reconciler:
    """
    Matches credit report entries against tracked debts.

    The reconciler holds no state between passes: it never mutates its
    inputs and performs no I/O, so it can be re-run on every change to
    either collection.
    """

    def __init__(self, strategies: Optional[Sequence[MatchingStrategy]] = None):
        """
        Initialize the reconciler.

        Args:
            strategies: Matching strategies in precedence order. Defaults to
                explicit link first, then the name/lender heuristic.
        """
        if strategies is None:
            strategies = (ExplicitLinkStrategy(), HeuristicStrategy())
        self.strategies = tuple(strategies)

    def reconcile(
        self, credit_entries: Sequence[CreditEntry], debts: Sequence[Debt]
    ) -> list[ComparisonResult]:
        """
        Reconcile credit entries with tracked debts.

        Args:
            credit_entries: Entries from the credit report, in display order
            debts: Tracked debts; earlier debts win heuristic ties

        Returns:
            One comparison result per credit entry, in input order
        """
        logger.debug(
            f"Reconciling {len(credit_entries)} credit entries against "
            f"{len(debts)} debts"
        )
        results = [self.compare(entry, debts) for entry in credit_entries]

        if results:
            counts = {status: 0 for status in ComparisonStatus}
            for result in results:
                counts[result.status] += 1
            logger.info(
                f"Reconciliation complete: {counts[ComparisonStatus.MATCHED]} matched, "
                f"{counts[ComparisonStatus.DISCREPANCY]} discrepancies, "
                f"{counts[ComparisonStatus.UNMATCHED]} unmatched"
            )
        return results

    def compare(self, entry: CreditEntry, debts: Sequence[Debt]) -> ComparisonResult:
        """
        Produce the comparison result for a single credit entry.

        Args:
            entry: Credit report entry
            debts: Tracked debts

        Returns:
            Classified comparison result
        """
        debt, rule = self._find_debt(entry, debts)

        if debt is None:
            return ComparisonResult(
                credit_entry=entry,
                matched_debt=None,
                status=ComparisonStatus.UNMATCHED,
            )

        balance_diff = abs(entry.balance - debt.balance)
        if balance_diff > DISCREPANCY_TOLERANCE:
            logger.debug(
                f"Entry {entry.id} differs from debt {debt.id} by {balance_diff}"
            )
            return ComparisonResult(
                credit_entry=entry,
                matched_debt=debt,
                status=ComparisonStatus.DISCREPANCY,
                balance_diff=balance_diff,
                match_rule=rule,
            )

        return ComparisonResult(
            credit_entry=entry,
            matched_debt=debt,
            status=ComparisonStatus.MATCHED,
            match_rule=rule,
        )

    def _find_debt(
        self, entry: CreditEntry, debts: Sequence[Debt]
    ) -> tuple[Optional[Debt], Optional[str]]:
        """Run the first applicable strategy and report what it found."""
        for strategy in self.strategies:
            if not strategy.applies_to(entry):
                continue

            debt = strategy.find_match(entry, debts)
            if debt is None:
                if isinstance(strategy, ExplicitLinkStrategy):
                    logger.warning(
                        f"Entry {entry.id} links to unknown debt {entry.matched_debt_id}"
                    )
                return None, None
            return debt, strategy.describe_match(entry, debt)

        return None, None


def partition(results: Sequence[ComparisonResult]) -> ReconciliationReport:
    """
    Split comparison results by status, preserving relative order.

    Args:
        results: Output of ``Reconciler.reconcile``

    Returns:
        Report holding the discrepancies, unmatched and matched views
    """
    report = ReconciliationReport(results=list(results))
    for result in results:
        if result.status is ComparisonStatus.DISCREPANCY:
            report.discrepancies.append(result)
        elif result.status is ComparisonStatus.UNMATCHED:
            report.unmatched.append(result)
        else:
            report.matched.append(result)
    return report


def reconcile(
    credit_entries: Sequence[CreditEntry], debts: Sequence[Debt]
) -> list[ComparisonResult]:
    """Reconcile with the default strategies."""
    return Reconciler().reconcile(credit_entries, debts)
