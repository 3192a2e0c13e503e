"""Matching engine and strategies."""

from .engine import DISCREPANCY_TOLERANCE, Reconciler, partition, reconcile
from .strategies import (
    MatchingStrategy,
    ExplicitLinkStrategy,
    HeuristicStrategy,
)

__all__ = [
    "DISCREPANCY_TOLERANCE",
    "Reconciler",
    "partition",
    "reconcile",
    "MatchingStrategy",
    "ExplicitLinkStrategy",
    "HeuristicStrategy",
]
