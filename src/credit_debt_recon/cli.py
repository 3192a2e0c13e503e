"""
Command-line interface for the credit report reconciliation toolkit.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ReconConfig, generate_default_config, load_config
from .insights.alerts import AlertEngine, format_money
from .insights.summary import summarize
from .matching.engine import Reconciler, partition
from .models.finance import AlertSeverity, ReconciliationReport
from .parsers.credit_report_parser import CreditReportParser
from .parsers.finance_parser import FinanceParser
from .reports.excel_generator import ExcelReportGenerator
from .storage.csv_gateway import CsvGateway
from .utils.exceptions import ReconciliationError
from .utils.logging_config import setup_logging

console = Console()

SEVERITY_STYLES = {
    AlertSeverity.DANGER: "bold red",
    AlertSeverity.WARNING: "yellow",
    AlertSeverity.INFO: "cyan",
}

config_option = click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
verbose_option = click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
as_of_option = click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date for alerts and adjusted balances (default: today)",
)


@click.group()
@click.version_option(version=__version__)
def main():
    """Credit report to tracked debt reconciliation tool."""
    pass


def _setup(config: Optional[Path], verbose: bool) -> ReconConfig:
    """Load configuration and configure logging."""
    recon_config = load_config(config)
    log_file = Path(recon_config.logging.file) if recon_config.logging.file else None
    setup_logging(
        logging.DEBUG if verbose else recon_config.logging.level,
        log_file=log_file,
        log_format=recon_config.logging.format,
    )
    return recon_config


def _fail(error: Exception, verbose: bool) -> None:
    console.print(f"[red]Error: {error}[/red]")
    if verbose:
        console.print_exception()
    sys.exit(1)


@main.command()
@click.argument("credit_file", type=click.Path(exists=True, path_type=Path))
@click.argument("debts_file", type=click.Path(exists=True, path_type=Path))
@config_option
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@as_of_option
@verbose_option
@click.option("--dry-run", is_flag=True, help="Show the comparison without writing a report")
def reconcile(
    credit_file: Path,
    debts_file: Path,
    config: Optional[Path],
    output: Optional[Path],
    as_of: Optional[datetime],
    verbose: bool,
    dry_run: bool,
):
    """
    Compare a credit report with your tracked debts.

    CREDIT_FILE: CSV export of credit report accounts
    DEBTS_FILE: CSV export of tracked debts
    """
    try:
        recon_config = _setup(config, verbose)

        entries = CreditReportParser(recon_config).parse_file(credit_file)
        debts = FinanceParser(recon_config).parse_debts(debts_file)

        report = partition(Reconciler().reconcile(entries, debts))
        if report.is_empty:
            return

        _display_report(report, recon_config.output.currency_symbol)

        if dry_run:
            console.print("\n[yellow]Dry run - no report generated[/yellow]")
            return

        today = as_of.date() if as_of else date.today()
        alerts = AlertEngine(
            recon_config.alerts, recon_config.output.currency_symbol
        ).generate(debts, today)

        if output is None:
            now = datetime.now()
            output = Path(
                recon_config.output.excel.filename_template.format(
                    date=now.strftime("%Y%m%d"), time=now.strftime("%H%M%S")
                )
            )

        report_path = ExcelReportGenerator(recon_config).generate_report(
            report,
            output,
            alerts=alerts,
            credit_report_name=credit_file.name,
            debts_name=debts_file.name,
        )
        if report_path:
            console.print(f"\n[green]Report generated: {report_path}[/green]")

    except ReconciliationError as e:
        _fail(e, verbose)


@main.command()
@click.argument("debts_file", type=click.Path(exists=True, path_type=Path))
@config_option
@as_of_option
@click.option("--high-apr", type=float, default=None, help="Override the high APR threshold")
@verbose_option
def alerts(
    debts_file: Path,
    config: Optional[Path],
    as_of: Optional[datetime],
    high_apr: Optional[float],
    verbose: bool,
):
    """
    Show alerts for tracked debts.

    DEBTS_FILE: CSV export of tracked debts
    """
    try:
        recon_config = _setup(config, verbose)
        if high_apr is not None:
            recon_config.alerts.high_apr_threshold = high_apr

        debts = FinanceParser(recon_config).parse_debts(debts_file)
        today = as_of.date() if as_of else date.today()
        found = AlertEngine(
            recon_config.alerts, recon_config.output.currency_symbol
        ).generate(debts, today)

        if not found:
            console.print("No alerts at the moment")
            return

        table = Table(title="Alerts")
        table.add_column("Severity")
        table.add_column("Title")
        table.add_column("Description")
        for alert in found:
            style = SEVERITY_STYLES[alert.severity]
            table.add_row(
                f"[{style}]{alert.severity.value}[/{style}]", alert.title, alert.description
            )
        console.print(table)

    except ReconciliationError as e:
        _fail(e, verbose)


@main.command()
@click.argument("debts_file", type=click.Path(exists=True, path_type=Path))
@click.option("--savings", type=click.Path(exists=True, path_type=Path), help="Savings CSV")
@click.option("--income", type=click.Path(exists=True, path_type=Path), help="Income CSV")
@click.option("--expenses", type=click.Path(exists=True, path_type=Path), help="Expenses CSV")
@config_option
@as_of_option
@verbose_option
def summary(
    debts_file: Path,
    savings: Optional[Path],
    income: Optional[Path],
    expenses: Optional[Path],
    config: Optional[Path],
    as_of: Optional[datetime],
    verbose: bool,
):
    """
    Show headline totals for debts, savings and monthly cashflow.

    DEBTS_FILE: CSV export of tracked debts
    """
    try:
        recon_config = _setup(config, verbose)
        parser = FinanceParser(recon_config)

        result = summarize(
            parser.parse_debts(debts_file),
            parser.parse_savings(savings) if savings else [],
            parser.parse_income(income) if income else [],
            parser.parse_expenses(expenses) if expenses else [],
            today=as_of.date() if as_of else date.today(),
        )

        symbol = recon_config.output.currency_symbol
        table = Table(title="Finance Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Total Debts", format_money(result.total_debts, symbol))
        table.add_row(
            "Adjusted Total Debts", format_money(result.adjusted_total_debts, symbol)
        )
        table.add_row("Total Savings", format_money(result.total_savings, symbol))
        table.add_row("Net Position", format_money(result.net_position, symbol))
        table.add_row("Monthly Incoming", format_money(result.monthly_incoming, symbol))
        table.add_row("Monthly Outgoings", format_money(result.monthly_outgoings, symbol))
        table.add_row("Monthly Surplus", format_money(result.monthly_surplus, symbol))
        console.print(table)

    except ReconciliationError as e:
        _fail(e, verbose)


@main.command()
@click.argument("credit_file", type=click.Path(exists=True, path_type=Path))
@click.argument("debts_file", type=click.Path(exists=True, path_type=Path))
@click.argument("entry_id")
@click.argument("debt_id")
@config_option
@verbose_option
def link(
    credit_file: Path,
    debts_file: Path,
    entry_id: str,
    debt_id: str,
    config: Optional[Path],
    verbose: bool,
):
    """
    Link a credit report entry to a tracked debt.

    The link overrides name and lender matching on later runs.
    """
    try:
        recon_config = _setup(config, verbose)
        gateway = CsvGateway(credit_file, debts_file, recon_config)
        entry = gateway.link_debt(entry_id, debt_id)
        console.print(f"[green]Linked {entry.name} to debt {debt_id}[/green]")

    except ReconciliationError as e:
        _fail(e, verbose)


@main.command("add-to-debts")
@click.argument("credit_file", type=click.Path(exists=True, path_type=Path))
@click.argument("debts_file", type=click.Path(path_type=Path))
@click.argument("entry_id")
@config_option
@verbose_option
def add_to_debts(
    credit_file: Path,
    debts_file: Path,
    entry_id: str,
    config: Optional[Path],
    verbose: bool,
):
    """
    Add a credit report entry to your tracked debts.

    DEBTS_FILE is created if it does not exist.
    """
    try:
        recon_config = _setup(config, verbose)
        gateway = CsvGateway(credit_file, debts_file, recon_config)

        entry = next((e for e in gateway.load_credit_entries() if e.id == entry_id), None)
        if entry is None:
            raise click.BadParameter(f"Unknown credit entry: {entry_id}", param_hint="ENTRY_ID")

        debt = gateway.add_to_debts(entry)
        console.print(f"[green]Added {debt.name} as debt {debt.id}[/green]")

    except ReconciliationError as e:
        _fail(e, verbose)


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _display_report(report: ReconciliationReport, currency: str) -> None:
    """Display the comparison in the console."""
    counts = []
    if report.discrepancies:
        counts.append(f"[red]{len(report.discrepancies)} discrepancy[/red]")
    if report.unmatched:
        counts.append(f"[yellow]{len(report.unmatched)} unmatched[/yellow]")
    if report.matched:
        counts.append(f"[green]{len(report.matched)} matched[/green]")
    console.print("Credit Report Comparison: " + ", ".join(counts))

    if report.discrepancies:
        table = Table(title="Balance Discrepancies")
        table.add_column("Account")
        table.add_column("Credit Report", justify="right")
        table.add_column("Your Tracking", justify="right")
        table.add_column("Difference", justify="right", style="red")
        for result in report.discrepancies:
            table.add_row(
                result.credit_entry.name,
                format_money(result.credit_entry.balance, currency),
                format_money(result.matched_debt.balance, currency),
                format_money(result.balance_diff, currency, places=0),
            )
        console.print(table)

    if report.unmatched:
        table = Table(title="Not In Your Debts")
        table.add_column("ID")
        table.add_column("Account")
        table.add_column("Lender")
        table.add_column("Balance", justify="right")
        for result in report.unmatched:
            entry = result.credit_entry
            table.add_row(
                entry.id, entry.name, entry.lender or "-", format_money(entry.balance, currency)
            )
        console.print(table)

    if report.matched:
        console.print(
            f"[green]{len(report.matched)} accounts match your tracked debts[/green]"
        )


if __name__ == "__main__":
    main()
