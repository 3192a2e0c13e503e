"""CSV-backed persistence gateway."""

from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Callable, Optional
from uuid import uuid4
import logging

from ..commands import AddToDebts
from ..config import ReconConfig
from ..models.finance import CreditEntry, Debt
from ..parsers.credit_report_parser import CreditReportParser
from ..parsers.finance_parser import FinanceParser
from ..utils.exceptions import EntryNotFoundError
from .interface import PersistenceGateway

logger = logging.getLogger(__name__)


def _new_debt_id() -> str:
    return f"debt-{uuid4().hex[:12]}"


class CsvGateway(PersistenceGateway):
    """
    Stores credit entries and debts in two CSV files.

    Loads are cached until a write. Writes touch only the affected row or
    append a row, leaving the rest of each file as the user wrote it, and
    invalidate the cache.
    """

    def __init__(
        self,
        credit_report_path: Path,
        debts_path: Path,
        config: ReconConfig,
        id_factory: Callable[[], str] = _new_debt_id,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the gateway.

        Args:
            credit_report_path: CSV file holding credit report entries
            debts_path: CSV file holding tracked debts
            config: Application configuration
            id_factory: Generates ids for debts created from entries
            today: Returns the date stamped on created debts
        """
        self.credit_report_path = credit_report_path
        self.debts_path = debts_path
        self.credit_parser = CreditReportParser(config)
        self.finance_parser = FinanceParser(config)
        self.id_factory = id_factory
        self.today = today or date.today
        self._entries: Optional[list[CreditEntry]] = None
        self._debts: Optional[list[Debt]] = None

    def load_credit_entries(self) -> list[CreditEntry]:
        if self._entries is None:
            self._entries = self.credit_parser.parse_file(self.credit_report_path)
        return list(self._entries)

    def load_debts(self) -> list[Debt]:
        if self._debts is None:
            if self.debts_path.exists():
                self._debts = self.finance_parser.parse_debts(self.debts_path)
            else:
                self._debts = []
        return list(self._debts)

    def invalidate(self) -> None:
        self._entries = None
        self._debts = None

    def link_debt(self, entry_id: str, debt_id: str) -> CreditEntry:
        """Record ``debt_id`` as the explicit match for ``entry_id``."""
        if not any(d.id == debt_id for d in self.load_debts()):
            raise EntryNotFoundError(f"Unknown debt: {debt_id}")
        return self._update_entry(entry_id, debt_id)

    def add_to_debts(self, entry: CreditEntry) -> Debt:
        """
        Append a debt built from the entry and link the entry to it.

        The link means the next pass matches the entry explicitly.
        """
        if not any(e.id == entry.id for e in self.load_credit_entries()):
            raise EntryNotFoundError(f"Unknown credit entry: {entry.id}")

        debt = AddToDebts(entry).to_debt(self.id_factory(), created_at=self.today())
        self.finance_parser.append_debt(debt, self.debts_path)
        self.invalidate()
        logger.info(f"Added debt {debt.id} from credit entry {entry.id}")

        self._update_entry(entry.id, debt.id)
        return debt

    def _update_entry(self, entry_id: str, debt_id: str) -> CreditEntry:
        entry = next((e for e in self.load_credit_entries() if e.id == entry_id), None)
        if entry is None:
            raise EntryNotFoundError(f"Unknown credit entry: {entry_id}")

        if not self.credit_parser.set_matched_debt(self.credit_report_path, entry_id, debt_id):
            raise EntryNotFoundError(f"Unknown credit entry: {entry_id}")
        self.invalidate()
        logger.info(f"Linked credit entry {entry_id} to debt {debt_id}")
        return replace(entry, matched_debt_id=debt_id)
