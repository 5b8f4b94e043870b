"""Receipt and report rendering.

Usage:
    from campusmeal.receipt import encode, booking_receipt_lines
"""

from campusmeal.receipt.lines import booking_receipt_lines, payment_receipt_lines, receipt_filename
from campusmeal.receipt.pdf import encode, lines_per_page
from campusmeal.receipt.reports import Report, ReportError, ReportFormat, ReportType, build_report

__all__ = [
    "Report",
    "ReportError",
    "ReportFormat",
    "ReportType",
    "booking_receipt_lines",
    "build_report",
    "encode",
    "lines_per_page",
    "payment_receipt_lines",
    "receipt_filename",
]
