"""Utility modules."""

from .exceptions import (
    ReconciliationError,
    CreditReportParseError,
    FinanceDataParseError,
    ConfigurationError,
    EntryNotFoundError,
    ReportGenerationError,
)
from .logging_config import setup_logging

__all__ = [
    "ReconciliationError",
    "CreditReportParseError",
    "FinanceDataParseError",
    "ConfigurationError",
    "EntryNotFoundError",
    "ReportGenerationError",
    "setup_logging",
]
