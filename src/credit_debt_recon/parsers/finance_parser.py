"""
Tracked finance data parser.
Parses debts, savings accounts, income sources and expenses from CSV exports.
"""

from dataclasses import asdict
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional, TypeVar
import logging

import pandas as pd

from ..config import ReconConfig
from ..models.finance import Debt, ExpenseItem, IncomeSource, SavingsAccount
from ..utils.exceptions import FinanceDataParseError
from .base import CsvParser

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEBT_FIELDS = (
    "id",
    "name",
    "lender",
    "type",
    "balance",
    "starting_balance",
    "apr",
    "is_promo_0",
    "promo_end_date",
    "payment_day",
    "minimum_payment",
    "planned_payment",
    "created_at",
)


def _required(
    parser: CsvParser, row: pd.Series, idx: int, amount_field: str
) -> Optional[tuple[str, Decimal]]:
    """Return a row's name and required amount, or None after logging why it is skipped."""
    name = parser.cell(row, "name")
    if not name:
        logger.warning(f"Row {idx}: Missing name, skipping")
        return None

    raw = parser.cell(row, amount_field)
    amount = parser.parse_amount(raw)
    if amount is None:
        reason = f"Invalid {amount_field} '{raw}'" if raw else f"Missing {amount_field}"
        logger.warning(f"Row {idx}: {reason}, skipping")
        return None
    return name, amount


class FinanceParser:
    """Parser for the user's tracked debts, savings, income and expenses."""

    def __init__(self, config: ReconConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config
        self.debts = CsvParser(config.input.debts)

    def parse_debts(self, file_path: Path) -> list[Debt]:
        """Parse tracked debts, preserving file order."""
        return self._parse(file_path, self.debts, self._debt_from_row, "debts")

    def parse_savings(self, file_path: Path) -> list[SavingsAccount]:
        parser = CsvParser(self.config.input.savings)

        def build(row: pd.Series, idx: int) -> Optional[SavingsAccount]:
            required = _required(parser, row, idx, "balance")
            if required is None:
                return None
            name, balance = required
            return SavingsAccount(
                id=parser.cell(row, "id") or f"SAV-{idx:05d}",
                name=name,
                balance=balance,
                provider=parser.cell(row, "provider"),
                aer=parser.parse_amount(parser.cell(row, "aer")) or Decimal("0"),
            )

        return self._parse(file_path, parser, build, "savings accounts")

    def parse_income(self, file_path: Path) -> list[IncomeSource]:
        parser = CsvParser(self.config.input.income)

        def build(row: pd.Series, idx: int) -> Optional[IncomeSource]:
            required = _required(parser, row, idx, "monthly_amount")
            if required is None:
                return None
            name, amount = required
            return IncomeSource(
                id=parser.cell(row, "id") or f"INC-{idx:05d}",
                name=name,
                monthly_amount=amount,
            )

        return self._parse(file_path, parser, build, "income sources")

    def parse_expenses(self, file_path: Path) -> list[ExpenseItem]:
        parser = CsvParser(self.config.input.expenses)

        def build(row: pd.Series, idx: int) -> Optional[ExpenseItem]:
            required = _required(parser, row, idx, "monthly_amount")
            if required is None:
                return None
            name, amount = required
            return ExpenseItem(
                id=parser.cell(row, "id") or f"EXP-{idx:05d}",
                name=name,
                monthly_amount=amount,
                category=parser.cell(row, "category"),
                provider=parser.cell(row, "provider"),
            )

        return self._parse(file_path, parser, build, "expenses")

    def append_debt(self, debt: Debt, file_path: Path) -> None:
        """
        Append a debt to the debts file, creating the file when missing.

        Existing rows and columns are written back unchanged.

        Raises:
            FinanceDataParseError: If the file cannot be read or written
        """
        try:
            if file_path.exists():
                df = self.debts.read_frame(file_path)
            else:
                df = self.debts.empty_frame(DEBT_FIELDS)
        except (OSError, ValueError) as e:
            raise FinanceDataParseError(f"Failed to read debts file: {e}") from e

        df = self.debts.append_row(df, asdict(debt), DEBT_FIELDS)

        try:
            self.debts.write_frame(df, file_path)
        except OSError as e:
            raise FinanceDataParseError(f"Failed to write debts file: {e}") from e
        logger.debug(f"Appended debt {debt.id} to {file_path}")

    def _debt_from_row(self, row: pd.Series, idx: int) -> Optional[Debt]:
        p = self.debts
        required = _required(p, row, idx, "balance")
        if required is None:
            return None
        name, balance = required

        promo_end = p.cell(row, "promo_end_date")
        promo_end_date = p.parse_date(promo_end)
        if promo_end and promo_end_date is None:
            logger.warning(f"Row {idx}: Invalid promo end date '{promo_end}', ignoring")

        payment_day = p.parse_int(p.cell(row, "payment_day"))
        if payment_day is not None and not 1 <= payment_day <= 31:
            logger.warning(f"Row {idx}: Payment day {payment_day} out of range, ignoring")
            payment_day = None

        return Debt(
            id=p.cell(row, "id") or f"DEBT-{idx:05d}",
            name=name,
            balance=balance,
            lender=p.cell(row, "lender"),
            type=p.cell(row, "type") or "other",
            apr=p.parse_amount(p.cell(row, "apr")) or Decimal("0"),
            is_promo_0=p.parse_bool(p.cell(row, "is_promo_0")),
            promo_end_date=promo_end_date,
            payment_day=payment_day,
            minimum_payment=p.parse_amount(p.cell(row, "minimum_payment")) or Decimal("0"),
            planned_payment=p.parse_amount(p.cell(row, "planned_payment")),
            starting_balance=p.parse_amount(p.cell(row, "starting_balance")),
            created_at=p.parse_date(p.cell(row, "created_at")),
        )

    def _parse(
        self,
        file_path: Path,
        parser: CsvParser,
        build: Callable[[pd.Series, int], Optional[T]],
        label: str,
    ) -> list[T]:
        """
        Read a CSV file and build one model per valid row.

        Raises:
            FinanceDataParseError: If the file cannot be read
        """
        logger.info(f"Parsing {label} file: {file_path}")

        try:
            df = parser.read_frame(file_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {label} file: {e}")
            raise FinanceDataParseError(f"Failed to read {label} file: {e}") from e

        items: list[T] = []
        for idx, row in df.iterrows():
            item = build(row, int(idx))
            if item is not None:
                items.append(item)

        logger.info(f"Extracted {len(items)} {label} from {file_path.name}")
        return items
