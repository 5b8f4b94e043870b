"""Student workflows."""

from campusmeal.application.student.booking import BookMealRequest, BookMealResult, run_book_meal
from campusmeal.application.student.dashboard import (
    LoadDashboardRequest,
    LoadDashboardResult,
    build_session,
    run_load_student_dashboard,
)
from campusmeal.application.student.receipt import (
    DownloadReceiptRequest,
    DownloadReceiptResult,
    run_download_receipt,
    save_payment_receipt,
)
from campusmeal.application.student.top_up import TopUpRequest, TopUpResult, run_top_up

__all__ = [
    "BookMealRequest",
    "BookMealResult",
    "run_book_meal",
    "LoadDashboardRequest",
    "LoadDashboardResult",
    "build_session",
    "run_load_student_dashboard",
    "DownloadReceiptRequest",
    "DownloadReceiptResult",
    "run_download_receipt",
    "save_payment_receipt",
    "TopUpRequest",
    "TopUpResult",
    "run_top_up",
]
