"""
Alert derivation over the tracked debts.
Flags promotional rates ending, payments coming due and high interest rates.
"""

from calendar import month_abbr
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence
import logging

from ..config import AlertSettings
from ..models.finance import Alert, AlertSeverity, AlertType, Debt
from .balances import add_months, days_until, monthly_debt_payment, next_payment_date

logger = logging.getLogger(__name__)


def format_money(amount: Decimal, symbol: str, places: int = 2) -> str:
    """Format an amount with a currency symbol, rounding half up."""
    quantum = Decimal(1).scaleb(-places)
    return f"{symbol}{amount.quantize(quantum, rounding=ROUND_HALF_UP)}"


class AlertEngine:
    """
    Derives alerts from the debt list and a reference date.

    Generation is pure: the same debts and date always give the same alerts,
    in the same order.
    """

    def __init__(
        self, settings: Optional[AlertSettings] = None, currency_symbol: str = "£"
    ):
        """
        Initialize the alert engine.

        Args:
            settings: Alert thresholds; defaults are used when omitted
            currency_symbol: Symbol used in alert descriptions
        """
        self.settings = settings or AlertSettings()
        self.currency_symbol = currency_symbol

    def generate(self, debts: Sequence[Debt], today: date) -> list[Alert]:
        """
        Build the alert list for a set of debts.

        Args:
            debts: Tracked debts
            today: Reference date for due-date calculations

        Returns:
            Alerts ordered by severity (danger, warning, info), otherwise in
            the order they were raised
        """
        alerts: list[Alert] = []

        month_total = sum((monthly_debt_payment(d) for d in debts), Decimal("0"))
        if month_total > 0:
            alerts.append(
                Alert(
                    id="monthly-payments",
                    type=AlertType.MONTHLY_PAYMENTS,
                    title="Debt Payments This Month",
                    description=f"Total due: {format_money(month_total, self.currency_symbol)}",
                    severity=AlertSeverity.INFO,
                )
            )
            upcoming = self._upcoming_payments(month_total, today)
            if upcoming is not None:
                alerts.append(upcoming)

        for debt in debts:
            for alert in (
                self._promo_alert(debt, today),
                self._payment_alert(debt, today),
                self._apr_alert(debt),
            ):
                if alert is not None:
                    alerts.append(alert)

        alerts.sort(key=lambda a: a.severity.rank)
        logger.debug(f"Generated {len(alerts)} alerts for {len(debts)} debts")
        return alerts

    def _upcoming_payments(self, month_total: Decimal, today: date) -> Optional[Alert]:
        """Same monthly total projected over the next few months."""
        months = []
        for offset in range(1, self.settings.upcoming_months + 1):
            _, month = add_months(today.year, today.month, offset)
            amount = format_money(month_total, self.currency_symbol, places=0)
            months.append(f"{month_abbr[month]}: {amount}")

        if not months:
            return None

        return Alert(
            id="upcoming-payments",
            type=AlertType.UPCOMING_PAYMENTS,
            title=f"Next {self.settings.upcoming_months} Months",
            description=", ".join(months),
            severity=AlertSeverity.INFO,
        )

    def _promo_alert(self, debt: Debt, today: date) -> Optional[Alert]:
        if not debt.is_promo_0 or debt.promo_end_date is None:
            return None

        remaining = days_until(debt.promo_end_date, today)
        if not 0 <= remaining <= self.settings.promo_window_days:
            return None

        severity = (
            AlertSeverity.DANGER
            if remaining <= self.settings.promo_danger_days
            else AlertSeverity.WARNING
        )
        return Alert(
            id=f"promo-{debt.id}",
            type=AlertType.PROMO_ENDING,
            title="0% Period Ending Soon",
            description=f"{debt.name}: {remaining} days remaining",
            severity=severity,
            debt_id=debt.id,
        )

    def _payment_alert(self, debt: Debt, today: date) -> Optional[Alert]:
        if not debt.payment_day:
            return None

        remaining = days_until(next_payment_date(debt.payment_day, today), today)
        if remaining > self.settings.payment_window_days:
            return None

        severity = (
            AlertSeverity.DANGER
            if remaining <= self.settings.payment_danger_days
            else AlertSeverity.INFO
        )
        return Alert(
            id=f"payment-{debt.id}",
            type=AlertType.PAYMENT_DUE,
            title="Payment Due Soon",
            description=f"{debt.name}: Due in {remaining} days",
            severity=severity,
            debt_id=debt.id,
        )

    def _apr_alert(self, debt: Debt) -> Optional[Alert]:
        threshold = Decimal(str(self.settings.high_apr_threshold))
        if debt.is_promo_0 or debt.apr < threshold:
            return None

        return Alert(
            id=f"apr-{debt.id}",
            type=AlertType.HIGH_APR,
            title="High Interest Rate",
            description=f"{debt.name}: {debt.apr.normalize():f}% APR",
            severity=AlertSeverity.WARNING,
            debt_id=debt.id,
        )
