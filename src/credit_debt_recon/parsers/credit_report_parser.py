"""
Credit report CSV parser.
Parses exported credit report accounts into CreditEntry models.
"""

from pathlib import Path
from typing import Optional
import logging

import pandas as pd

from ..config import ReconConfig
from ..models.finance import CreditEntry
from ..utils.exceptions import CreditReportParseError
from .base import CsvParser

logger = logging.getLogger(__name__)

ID_PREFIX = "CR"


class CreditReportParser(CsvParser):
    """
    Parser for credit report account exports.

    Rows without a name or a readable balance are skipped with a warning;
    rows without an id get a generated one.
    """

    def __init__(self, config: ReconConfig):
        super().__init__(config.input.credit_report)
        self.config = config

    def parse_file(self, file_path: Path) -> list[CreditEntry]:
        """
        Parse a credit report CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            Credit entries in file order

        Raises:
            CreditReportParseError: If the file cannot be read
        """
        logger.info(f"Parsing credit report file: {file_path}")

        try:
            df = self.read_frame(file_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read credit report file: {e}")
            raise CreditReportParseError(f"Failed to read credit report file: {e}") from e

        entries: list[CreditEntry] = []
        for idx, row in df.iterrows():
            entry = self._normalize_row(row, int(idx))
            if entry:
                entries.append(entry)

        logger.info(f"Extracted {len(entries)} credit entries from {file_path.name}")
        return entries

    def _normalize_row(self, row: pd.Series, idx: int) -> Optional[CreditEntry]:
        """Convert a DataFrame row to a CreditEntry, or None if invalid."""
        name = self.cell(row, "name")
        if not name:
            logger.warning(f"Row {idx}: Missing account name, skipping")
            return None

        balance = self.parse_amount(self.cell(row, "balance"))
        if balance is None:
            logger.warning(f"Row {idx}: Invalid balance, skipping")
            return None

        return CreditEntry(
            id=self.cell(row, "id") or f"{ID_PREFIX}-{idx:05d}",
            name=name,
            balance=balance,
            lender=self.cell(row, "lender"),
            matched_debt_id=self.cell(row, "matched_debt_id"),
            type=self.cell(row, "type") or "other",
            credit_limit=self.parse_amount(self.cell(row, "credit_limit")),
            monthly_payment=self.parse_amount(self.cell(row, "monthly_payment")),
            account_status=self.cell(row, "account_status") or "open",
            notes=self.cell(row, "notes"),
        )

    def set_matched_debt(self, file_path: Path, entry_id: str, debt_id: str) -> bool:
        """
        Record a debt link in the credit report file.

        Only the link cell of the entry's row changes; every other row,
        column and cell is written back as read.

        Args:
            file_path: Credit report CSV file
            entry_id: Id of the parsed entry, generated ids included
            debt_id: Debt to link

        Returns:
            False if no row holds the entry

        Raises:
            CreditReportParseError: If the file cannot be read or written
        """
        try:
            df = self.read_frame(file_path)
        except (OSError, ValueError) as e:
            raise CreditReportParseError(f"Failed to read credit report file: {e}") from e

        label = self.find_row(df, entry_id, ID_PREFIX)
        if label is None:
            return False
        self.set_cell(df, label, "matched_debt_id", debt_id)

        try:
            self.write_frame(df, file_path)
        except OSError as e:
            raise CreditReportParseError(f"Failed to write credit report file: {e}") from e

        logger.debug(f"Set matched debt {debt_id} on row {label} of {file_path}")
        return True
