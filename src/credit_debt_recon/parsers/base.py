"""
Shared CSV handling for the input parsers.
Reads files with pandas and converts cells into model field values.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Hashable, Optional, Sequence
import logging

import pandas as pd

from ..config import FileInputConfig

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "y", "t"}
CURRENCY_CHARS = ("£", "$", "€", ",")


class CsvParser:
    """Base class for column-mapped CSV parsers."""

    def __init__(self, file_config: FileInputConfig):
        """
        Initialize the parser with one file's configuration.

        Args:
            file_config: Encoding, delimiter, date format and column mappings
        """
        self.file_config = file_config

    def read_frame(self, file_path: Path) -> pd.DataFrame:
        """
        Read a CSV file into a DataFrame of strings.

        Blank cells stay empty strings so a frame written back keeps every
        cell as the user wrote it.

        Raises:
            OSError, ValueError: If pandas cannot read the file
        """
        return pd.read_csv(
            file_path,
            encoding=self.file_config.encoding,
            delimiter=self.file_config.delimiter,
            dtype=str,
            keep_default_na=False,
        )

    def empty_frame(self, fields: Sequence[str]) -> pd.DataFrame:
        return pd.DataFrame(columns=[self.file_config.column(f) for f in fields])

    def write_frame(self, df: pd.DataFrame, file_path: Path) -> None:
        """Write a frame back to CSV with the configured encoding and delimiter."""
        file_path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(
            file_path,
            index=False,
            encoding=self.file_config.encoding,
            sep=self.file_config.delimiter,
        )

    def find_row(self, df: pd.DataFrame, record_id: str, id_prefix: str) -> Optional[Hashable]:
        """
        Find the row a parsed record came from.

        Rows without an id are matched on the id generated for them at parse
        time, so the generated id never has to be written to the file.

        Returns:
            Index label of the first matching row, or None
        """
        for idx, row in df.iterrows():
            if (self.cell(row, "id") or f"{id_prefix}-{int(idx):05d}") == record_id:
                return idx
        return None

    def set_cell(self, df: pd.DataFrame, label: Hashable, field_name: str, value: Any) -> None:
        """Set one field of one row, adding the mapped column when it is missing."""
        column = self.file_config.column(field_name)
        if column not in df.columns:
            df[column] = ""
        df.at[label, column] = self._format_cell(value)

    def append_row(
        self, df: pd.DataFrame, record: dict[str, Any], fields: Sequence[str]
    ) -> pd.DataFrame:
        """
        Append a record keyed by field name.

        Existing rows and columns are kept; fields without a column get one,
        and cells the record does not fill are left blank.
        """
        row = {self.file_config.column(f): self._format_cell(record.get(f)) for f in fields}
        columns = list(df.columns) + [c for c in row if c not in df.columns]
        new_row = pd.DataFrame([row]).reindex(columns=columns, fill_value="")
        if df.empty:
            return new_row
        return pd.concat(
            [df.reindex(columns=columns, fill_value=""), new_row], ignore_index=True
        )

    def cell(self, row: pd.Series, field_name: str) -> Optional[str]:
        """Return the stripped cell for a field, or None when blank or missing."""
        value = row.get(self.file_config.column(field_name))
        if value is None or pd.isna(value):
            return None
        text = str(value).strip()
        return text or None

    def parse_amount(self, value: Optional[str]) -> Optional[Decimal]:
        """
        Parse an amount, ignoring currency symbols and thousands separators.

        Returns:
            Decimal amount or None
        """
        if value is None:
            return None
        for char in CURRENCY_CHARS:
            value = value.replace(char, "")
        try:
            amount = Decimal(value.strip())
        except (InvalidOperation, ValueError):
            return None
        # Infinity and NaN parse as Decimals but cannot be compared or formatted
        if not amount.is_finite():
            return None
        return amount

    def parse_date(self, value: Optional[str]) -> Optional[date]:
        """
        Parse a date using the configured format, falling back to pandas.

        Returns:
            Python date object or None
        """
        if value is None:
            return None

        try:
            return datetime.strptime(value, self.file_config.date_format).date()
        except ValueError:
            # Try pandas parser as fallback
            try:
                parsed = pd.to_datetime(value)
            except (ValueError, TypeError):
                return None
            if pd.isna(parsed):
                return None
            return parsed.date()

    def parse_int(self, value: Optional[str]) -> Optional[int]:
        if value is None:
            return None
        try:
            return int(float(value))
        except (ValueError, OverflowError):
            return None

    def parse_bool(self, value: Optional[str]) -> bool:
        return value is not None and value.lower() in TRUE_VALUES

    def _format_cell(self, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, date):
            return value.strftime(self.file_config.date_format)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, Decimal):
            return str(value)
        return value
