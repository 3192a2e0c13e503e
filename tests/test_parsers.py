"""Tests for the CSV parsers."""

from datetime import date
from decimal import Decimal
from pathlib import Path
import logging

import pytest

from credit_debt_recon.config import FileInputConfig, ReconConfig
from credit_debt_recon.parsers import CreditReportParser, FinanceParser
from credit_debt_recon.utils.exceptions import CreditReportParseError, FinanceDataParseError

from conftest import make_debt


class TestCreditReportParser:
    def test_parse_file(self, config, credit_csv):
        entries = CreditReportParser(config).parse_file(credit_csv)

        assert [e.id for e in entries] == ["c1", "c2", "c3"]
        first = entries[0]
        assert first.name == "Barclaycard Platinum"
        assert first.lender == "Barclays"
        assert first.balance == Decimal("500")
        assert first.credit_limit == Decimal("3000")
        assert first.matched_debt_id is None
        assert first.notes is None

    def test_currency_formatted_balance_and_link(self, config, credit_csv):
        entry = CreditReportParser(config).parse_file(credit_csv)[2]

        assert entry.balance == Decimal("1250.50")
        assert entry.matched_debt_id == "d2"
        assert entry.notes == "checked"

    def test_invalid_rows_skipped(self, config, tmp_path: Path):
        path = tmp_path / "report.csv"
        path.write_text("id,name,balance\n,No id,10\nc2,,20\nc3,Bad balance,abc\n")

        entries = CreditReportParser(config).parse_file(path)

        assert len(entries) == 1
        assert entries[0].id == "CR-00000"
        assert entries[0].lender is None
        assert entries[0].account_status == "open"

    def test_column_mappings(self, tmp_path: Path):
        config = ReconConfig()
        config.input.credit_report = FileInputConfig(
            delimiter=";",
            column_mappings={"name": "Account Name", "balance": "Current Balance"},
        )
        path = tmp_path / "report.csv"
        path.write_text("id;Account Name;Current Balance\nx1;Amex;12.34\n")

        [entry] = CreditReportParser(config).parse_file(path)

        assert entry.name == "Amex"
        assert entry.balance == Decimal("12.34")

    def test_missing_file(self, config, tmp_path: Path):
        with pytest.raises(CreditReportParseError):
            CreditReportParser(config).parse_file(tmp_path / "missing.csv")

    def test_set_matched_debt_changes_only_the_link_cell(self, config, tmp_path: Path):
        path = tmp_path / "report.csv"
        path.write_text(
            "id,name,lender,balance,reported_on\n"
            "c1,Barclaycard,Barclays,500,2026-09-30\n"
            "c2,Pending account,XYZ,,2026-09-30\n"
            ",No id,,NA,2026-09-30\n"
        )
        parser = CreditReportParser(config)

        assert parser.set_matched_debt(path, "c1", "d1")

        assert path.read_text().splitlines() == [
            "id,name,lender,balance,reported_on,matched_debt_id",
            "c1,Barclaycard,Barclays,500,2026-09-30,d1",
            "c2,Pending account,XYZ,,2026-09-30,",
            ",No id,,NA,2026-09-30,",
        ]

    def test_set_matched_debt_on_generated_id(self, config, tmp_path: Path):
        path = tmp_path / "report.csv"
        path.write_text("id,name,balance\nc1,Card,10\n,Loan,20\n")
        parser = CreditReportParser(config)

        assert parser.set_matched_debt(path, "CR-00001", "d9")
        assert not parser.set_matched_debt(path, "missing", "d9")

        [_, loan] = parser.parse_file(path)
        assert loan.id == "CR-00001"
        assert loan.matched_debt_id == "d9"
        assert path.read_text().splitlines()[2] == ",Loan,20,d9"

    @pytest.mark.parametrize("balance", ["inf", "Infinity", "-Infinity", "NaN", "sNaN"])
    def test_non_finite_balance_skipped(self, config, tmp_path: Path, balance):
        path = tmp_path / "report.csv"
        path.write_text(f"id,name,balance\nc1,Card,{balance}\nc2,Loan,20\n")

        entries = CreditReportParser(config).parse_file(path)

        assert [e.id for e in entries] == ["c2"]


class TestFinanceParser:
    def test_parse_debts(self, config, debts_csv):
        debts = FinanceParser(config).parse_debts(debts_csv)

        assert [d.id for d in debts] == ["d1", "d2"]
        card, car = debts
        assert card.apr == Decimal("22.9")
        assert card.is_promo_0 is False
        assert card.payment_day == 15
        assert card.planned_payment is None
        assert card.created_at == date(2026, 1, 10)
        assert car.planned_payment == Decimal("250")

    def test_promo_and_bad_payment_day(self, config, tmp_path: Path):
        path = tmp_path / "debts.csv"
        path.write_text(
            "id,name,balance,is_promo_0,promo_end_date,payment_day\n"
            "d1,Card,100,TRUE,2026-12-01,40\n"
        )

        [debt] = FinanceParser(config).parse_debts(path)

        assert debt.is_promo_0 is True
        assert debt.promo_end_date == date(2026, 12, 1)
        assert debt.payment_day is None

    def test_non_finite_numbers(self, config, tmp_path: Path):
        path = tmp_path / "debts.csv"
        path.write_text(
            "id,name,balance,apr,payment_day,minimum_payment\n"
            "d1,Card,100,Infinity,inf,sNaN\n"
            "d2,Loan,sNaN,10,1,20\n"
        )

        [debt] = FinanceParser(config).parse_debts(path)

        assert debt.id == "d1"
        assert debt.apr == Decimal("0")
        assert debt.payment_day is None
        assert debt.minimum_payment == Decimal("0")

    def test_skipped_rows_log_reason(self, config, tmp_path: Path, caplog):
        path = tmp_path / "debts.csv"
        path.write_text("id,name,balance\nd1,,100\nd2,Card,\nd3,Loan,abc\n")

        with caplog.at_level(logging.WARNING, logger="credit_debt_recon"):
            assert FinanceParser(config).parse_debts(path) == []

        assert [r.getMessage() for r in caplog.records] == [
            "Row 0: Missing name, skipping",
            "Row 1: Missing balance, skipping",
            "Row 2: Invalid balance 'abc', skipping",
        ]

    def test_append_debt_keeps_existing_rows_and_columns(self, config, tmp_path: Path):
        path = tmp_path / "debts.csv"
        path.write_text("id,name,balance,nickname\nd1,Card,100,blue card\nd2,,,draft\n")
        parser = FinanceParser(config)
        debt = make_debt("d3", "Loan", 250, lender="XYZ", created_at=date(2026, 10, 18))

        parser.append_debt(debt, path)

        lines = path.read_text().splitlines()
        assert lines[:3] == [
            "id,name,balance,nickname,lender,type,starting_balance,apr,is_promo_0,"
            "promo_end_date,payment_day,minimum_payment,planned_payment,created_at",
            "d1,Card,100,blue card,,,,,,,,,,",
            "d2,,,draft,,,,,,,,,,",
        ]
        assert [d.id for d in parser.parse_debts(path)] == ["d1", "d3"]
        assert parser.parse_debts(path)[1] == debt

    def test_append_debt_creates_file(self, config, tmp_path: Path):
        path = tmp_path / "new" / "debts.csv"
        debt = make_debt("d1", "Loan", 250)

        FinanceParser(config).append_debt(debt, path)

        assert FinanceParser(config).parse_debts(path) == [debt]

    def test_savings_income_expenses(self, config, tmp_path: Path):
        savings = tmp_path / "savings.csv"
        savings.write_text("id,name,provider,balance,aer\ns1,ISA,Marcus,2000,4.1\n")
        income = tmp_path / "income.csv"
        income.write_text("name,monthly_amount\nSalary,2500\n")
        expenses = tmp_path / "expenses.csv"
        expenses.write_text("id,name,monthly_amount,category\ne1,Rent,900,housing\ne2,Broken,\n")

        parser = FinanceParser(config)

        [account] = parser.parse_savings(savings)
        assert account.aer == Decimal("4.1")
        [source] = parser.parse_income(income)
        assert source.id == "INC-00000"
        [expense] = parser.parse_expenses(expenses)
        assert expense.category == "housing"

    def test_missing_file(self, config, tmp_path: Path):
        with pytest.raises(FinanceDataParseError):
            FinanceParser(config).parse_debts(tmp_path / "missing.csv")
