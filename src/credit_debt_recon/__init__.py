"""Credit report to tracked debt reconciliation toolkit."""

__version__ = "0.1.0"
