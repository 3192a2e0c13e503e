"""Persistence gateways for credit entries and debts."""

from .csv_gateway import CsvGateway
from .interface import PersistenceGateway

__all__ = ["CsvGateway", "PersistenceGateway"]
