"""Parsers for credit report and tracked finance files."""

from .credit_report_parser import CreditReportParser
from .finance_parser import FinanceParser

__all__ = ["CreditReportParser", "FinanceParser"]
