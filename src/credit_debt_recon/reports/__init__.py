"""Report writers."""

from .excel_generator import ExcelReportGenerator

__all__ = ["ExcelReportGenerator"]
