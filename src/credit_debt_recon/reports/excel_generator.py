"""
Excel report generator for credit report reconciliation.
Creates a multi-sheet workbook with formatted output.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence
import logging

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..config import ReconConfig, SheetConfig
from ..models.finance import Alert, AlertSeverity, ComparisonResult, ReconciliationReport
from ..utils.exceptions import ReportGenerationError

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
MATCH_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
VARIANCE_FILL = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
UNMATCHED_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

SEVERITY_FILLS = {
    AlertSeverity.DANGER: UNMATCHED_FILL,
    AlertSeverity.WARNING: VARIANCE_FILL,
    AlertSeverity.INFO: None,
}


class ExcelReportGenerator:
    """Generates Excel reconciliation reports with multiple sheets."""

    def __init__(self, config: ReconConfig):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config
        self.sheet_config = config.output.sheets
        self.currency = config.output.currency_symbol

    def generate_report(
        self,
        report: ReconciliationReport,
        output_path: Path,
        alerts: Sequence[Alert] = (),
        credit_report_name: str = "",
        debts_name: str = "",
    ) -> Optional[Path]:
        """
        Generate the reconciliation workbook.

        Args:
            report: Partitioned reconciliation results
            output_path: Path for output file
            alerts: Alerts to include on their own sheet
            credit_report_name: Name of the credit report source
            debts_name: Name of the debts source

        Returns:
            Path to generated report, or None when the report is empty and
            nothing was written

        Raises:
            ReportGenerationError: If the workbook cannot be saved
        """
        if report.is_empty:
            logger.info("No credit entries to report, skipping workbook")
            return None

        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()

        # Remove default sheet
        if wb.active:
            wb.remove(wb.active)

        sheets = self.sheet_config
        if sheets.summary.enabled:
            self._create_summary_sheet(wb, sheets.summary, report, credit_report_name, debts_name)
        if sheets.discrepancies.enabled:
            self._create_discrepancy_sheet(wb, sheets.discrepancies, report.discrepancies)
        if sheets.unmatched.enabled:
            self._create_unmatched_sheet(wb, sheets.unmatched, report.unmatched)
        if sheets.matched.enabled:
            self._create_matched_sheet(wb, sheets.matched, report.matched)
        if sheets.alerts.enabled and alerts:
            self._create_alerts_sheet(wb, sheets.alerts, alerts)

        if not wb.sheetnames:
            logger.warning("All report sheets are disabled, skipping workbook")
            return None

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise ReportGenerationError(f"Failed to save report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path}")
        return output_path

    def _create_summary_sheet(
        self,
        wb: Workbook,
        sheet: SheetConfig,
        report: ReconciliationReport,
        credit_report_name: str,
        debts_name: str,
    ) -> None:
        """Create the summary sheet with key metrics."""
        ws = wb.create_sheet(sheet.name)

        ws["A1"] = "Credit Report Comparison"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        rows = [
            ("Credit Report:", credit_report_name or "-"),
            ("Tracked Debts:", debts_name or "-"),
            ("Generated At:", datetime.now().strftime("%Y-%m-%d %H:%M:%S")),
            ("Config File:", self.config.config_file_path or "Default"),
            ("", ""),
            ("Credit Entries:", len(report.results)),
            ("Matched:", len(report.matched)),
            ("Balance Discrepancies:", len(report.discrepancies)),
            ("Not In Your Debts:", len(report.unmatched)),
            ("Match Rate:", f"{report.match_rate:.1f}%"),
            ("Total Discrepancy:", f"{self.currency}{report.total_discrepancy:,.2f}"),
        ]

        for i, (label, value) in enumerate(rows, start=3):
            ws[f"A{i}"] = label
            ws[f"B{i}"] = value
            if label:
                ws[f"A{i}"].font = Font(bold=True)

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 40

    def _create_discrepancy_sheet(
        self, wb: Workbook, sheet: SheetConfig, results: list[ComparisonResult]
    ) -> None:
        """Create the balance discrepancies sheet."""
        ws = wb.create_sheet(sheet.name)
        self._write_headers(
            ws,
            [
                "Entry ID",
                "Account",
                "Lender",
                "Report Balance",
                "Debt ID",
                "Tracked Debt",
                "Tracked Balance",
                "Difference",
                "Match Rule",
            ],
        )

        for row_num, result in enumerate(results, start=2):
            entry, debt = result.credit_entry, result.matched_debt
            row_data = [
                entry.id,
                entry.name,
                entry.lender or "",
                float(entry.balance),
                debt.id if debt else "",
                debt.name if debt else "",
                float(debt.balance) if debt else "",
                float(result.balance_diff) if result.balance_diff is not None else "",
                result.match_rule or "",
            ]
            self._write_row(ws, row_num, row_data, VARIANCE_FILL)

        self._auto_fit_columns(ws)

    def _create_unmatched_sheet(
        self, wb: Workbook, sheet: SheetConfig, results: list[ComparisonResult]
    ) -> None:
        """Create the sheet of credit entries with no tracked debt."""
        ws = wb.create_sheet(sheet.name)
        self._write_headers(
            ws,
            ["Entry ID", "Account", "Lender", "Type", "Balance", "Status", "Linked Debt ID"],
        )

        for row_num, result in enumerate(results, start=2):
            entry = result.credit_entry
            row_data = [
                entry.id,
                entry.name,
                entry.lender or "",
                entry.type,
                float(entry.balance),
                entry.account_status,
                entry.matched_debt_id or "",
            ]
            self._write_row(ws, row_num, row_data, UNMATCHED_FILL)

        self._auto_fit_columns(ws)

    def _create_matched_sheet(
        self, wb: Workbook, sheet: SheetConfig, results: list[ComparisonResult]
    ) -> None:
        """Create the matched accounts sheet."""
        ws = wb.create_sheet(sheet.name)
        self._write_headers(
            ws,
            [
                "Entry ID",
                "Account",
                "Report Balance",
                "Debt ID",
                "Tracked Debt",
                "Tracked Balance",
                "Match Rule",
            ],
        )

        for row_num, result in enumerate(results, start=2):
            entry, debt = result.credit_entry, result.matched_debt
            row_data = [
                entry.id,
                entry.name,
                float(entry.balance),
                debt.id if debt else "",
                debt.name if debt else "",
                float(debt.balance) if debt else "",
                result.match_rule or "",
            ]
            self._write_row(ws, row_num, row_data, MATCH_FILL)

        self._auto_fit_columns(ws)

    def _create_alerts_sheet(
        self, wb: Workbook, sheet: SheetConfig, alerts: Sequence[Alert]
    ) -> None:
        """Create the alerts sheet."""
        ws = wb.create_sheet(sheet.name)
        self._write_headers(ws, ["Severity", "Type", "Title", "Description", "Debt ID"])

        for row_num, alert in enumerate(alerts, start=2):
            row_data = [
                alert.severity.value,
                alert.type.value,
                alert.title,
                alert.description,
                alert.debt_id or "",
            ]
            self._write_row(ws, row_num, row_data, SEVERITY_FILLS[alert.severity])

        self._auto_fit_columns(ws)

    def _write_headers(self, ws: Worksheet, headers: list[str]) -> None:
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

    def _write_row(
        self, ws: Worksheet, row_num: int, values: list, fill: Optional[PatternFill]
    ) -> None:
        for col, value in enumerate(values, start=1):
            cell = ws.cell(row=row_num, column=col, value=value)
            cell.border = THIN_BORDER
            if fill is not None:
                cell.fill = fill

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        for column_cells in ws.columns:
            column = column_cells[0].column_letter
            max_length = max(
                (len(str(cell.value)) for cell in column_cells if cell.value is not None),
                default=0,
            )
            ws.column_dimensions[column].width = min(max_length + 2, 50)
