"""Shared fixtures for the reconciliation tests."""

from decimal import Decimal
from pathlib import Path

import pytest

from credit_debt_recon.config import ReconConfig
from credit_debt_recon.models.finance import CreditEntry, Debt


def make_entry(id="c1", name="Account", balance="0", **kwargs) -> CreditEntry:
    return CreditEntry(id=id, name=name, balance=Decimal(str(balance)), **kwargs)


def make_debt(id="d1", name="Debt", balance="0", **kwargs) -> Debt:
    for key in ("apr", "minimum_payment", "planned_payment", "starting_balance"):
        if key in kwargs and kwargs[key] is not None:
            kwargs[key] = Decimal(str(kwargs[key]))
    return Debt(id=id, name=name, balance=Decimal(str(balance)), **kwargs)


@pytest.fixture
def config() -> ReconConfig:
    return ReconConfig()


@pytest.fixture
def credit_csv(tmp_path: Path) -> Path:
    path = tmp_path / "credit_report.csv"
    path.write_text(
        "id,name,lender,type,balance,credit_limit,monthly_payment,account_status,matched_debt_id,notes\n"
        "c1,Barclaycard Platinum,Barclays,credit_card,500,3000,25,open,,\n"
        "c2,Unknown Finance Co,XYZ,loan,300,,40,open,,\n"
        "c3,Car Loan,Close Brothers,car_finance,\"£1,250.50\",,,open,d2,checked\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def debts_csv(tmp_path: Path) -> Path:
    path = tmp_path / "debts.csv"
    path.write_text(
        "id,name,lender,type,balance,apr,is_promo_0,promo_end_date,payment_day,minimum_payment,planned_payment,created_at\n"
        "d1,Barclaycard,Barclays,credit_card,480,22.9,false,,15,25,,2026-01-10\n"
        "d2,Motor finance,Close Brothers,car_finance,1250,9.9,false,,1,200,250,2025-06-01\n",
        encoding="utf-8",
    )
    return path
