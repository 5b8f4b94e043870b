"""Administrator workflows."""

from campusmeal.application.admin.access import PermissionDenied, require_admin
from campusmeal.application.admin.listing import (
    DeleteResult,
    ListingResult,
    run_delete_meal,
    run_delete_user,
    run_list_meals,
    run_list_users,
)
from campusmeal.application.admin.reports import GenerateReportRequest, GenerateReportResult, run_generate_report
from campusmeal.application.admin.statistics import StatisticsResult, fetch_all, run_load_statistics

__all__ = [
    "PermissionDenied",
    "require_admin",
    "DeleteResult",
    "ListingResult",
    "run_delete_meal",
    "run_delete_user",
    "run_list_meals",
    "run_list_users",
    "GenerateReportRequest",
    "GenerateReportResult",
    "run_generate_report",
    "StatisticsResult",
    "fetch_all",
    "run_load_statistics",
]
