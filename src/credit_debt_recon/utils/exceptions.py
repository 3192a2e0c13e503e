"""Custom exceptions for the reconciliation toolkit."""


class ReconciliationError(Exception):
    """Base exception for reconciliation errors."""

    pass


class CreditReportParseError(ReconciliationError):
    """Error parsing a credit report export."""

    pass


class FinanceDataParseError(ReconciliationError):
    """Error parsing tracked finance data (debts, savings, income, expenses)."""

    pass


class ConfigurationError(ReconciliationError):
    """Error in configuration."""

    pass


class EntryNotFoundError(ReconciliationError):
    """A command referenced a credit entry or debt that does not exist."""

    pass


class ReportGenerationError(ReconciliationError):
    """Error generating Excel report."""

    pass
