"""Tests for the Excel report generator."""

from datetime import date
from pathlib import Path

from openpyxl import load_workbook

from credit_debt_recon.config import ReconConfig
from credit_debt_recon.insights.alerts import AlertEngine
from credit_debt_recon.matching import partition, reconcile
from credit_debt_recon.reports import ExcelReportGenerator

from conftest import make_debt, make_entry


def build_report():
    entries = [
        make_entry("c1", "Barclaycard Platinum", 500, lender="Barclays"),
        make_entry("c2", "Unknown Finance Co", 300, lender="XYZ"),
        make_entry("c3", "Mortgage", 1000),
    ]
    debts = [
        make_debt("d1", "Barclaycard", 480, lender="Barclays", apr=29.9),
        make_debt("d2", "Home mortgage", 1000),
    ]
    return partition(reconcile(entries, debts)), debts


class TestExcelReportGenerator:
    def test_sheets_and_rows(self, config, tmp_path: Path):
        report, debts = build_report()
        alerts = AlertEngine().generate(debts, date(2026, 10, 18))
        output = tmp_path / "out" / "report.xlsx"

        path = ExcelReportGenerator(config).generate_report(
            report, output, alerts=alerts, credit_report_name="credit.csv"
        )

        assert path == output
        wb = load_workbook(output)
        assert wb.sheetnames == [
            "Summary",
            "Balance Discrepancies",
            "Not In Your Debts",
            "Matched",
            "Alerts",
        ]

        discrepancies = wb["Balance Discrepancies"]
        assert discrepancies["A2"].value == "c1"
        assert discrepancies["H2"].value == 20
        assert wb["Not In Your Debts"]["B2"].value == "Unknown Finance Co"
        assert wb["Matched"]["D2"].value == "d2"
        assert wb["Alerts"]["B2"].value == "high_apr"
        assert wb["Summary"]["B3"].value == "credit.csv"

    def test_empty_report_writes_nothing(self, config, tmp_path: Path):
        output = tmp_path / "report.xlsx"

        path = ExcelReportGenerator(config).generate_report(partition([]), output)

        assert path is None
        assert not output.exists()

    def test_disabled_sheets(self, tmp_path: Path):
        config = ReconConfig()
        config.output.sheets.matched.enabled = False
        config.output.sheets.alerts.enabled = False
        report, _ = build_report()
        output = tmp_path / "report.xlsx"

        ExcelReportGenerator(config).generate_report(report, output)

        assert "Matched" not in load_workbook(output).sheetnames
