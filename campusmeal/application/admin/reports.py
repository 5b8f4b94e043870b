"""Admin report export workflow."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Literal

from campusmeal.application.admin.statistics import run_load_statistics
from campusmeal.domain.models import Session
from campusmeal.receipt.reports import ReportError, ReportFormat, ReportType, build_report
from campusmeal.runtime import CampusApiClient, get_logger, reports_dir, save_document

logger = get_logger(__name__)

ReportStatus = Literal["forbidden", "failed", "empty", "generated"]


@dataclass(frozen=True)
class GenerateReportRequest:
    """Inputs for exporting an admin report."""

    session: Session
    report_type: ReportType
    report_format: ReportFormat
    output_dir: Path
    now: Callable[[], datetime] = datetime.now


@dataclass(frozen=True)
class GenerateReportResult:
    status: ReportStatus
    paths: list[Path] = field(default_factory=list)
    error: str | None = None


def run_generate_report(client: CampusApiClient, request: GenerateReportRequest) -> GenerateReportResult:
    """Fetch current data, render the report and save it under reports/."""
    loaded = run_load_statistics(client, request.session)
    if loaded.status != "loaded":
        return GenerateReportResult(status=loaded.status, error=loaded.error)
    assert loaded.statistics is not None

    try:
        reports = build_report(
            request.report_type,
            request.report_format,
            loaded.statistics,
            loaded.users,
            loaded.meals,
            generated_at=request.now(),
        )
    except ReportError as exc:
        return GenerateReportResult(status="empty", error=str(exc))

    if request.report_type is ReportType.FULL and request.report_format is ReportFormat.CSV:
        for label, rows in (("users", loaded.users), ("meals", loaded.meals)):
            if not rows:
                logger.warning("No %s to export; skipping the %s CSV file", label, label)

    paths: list[Path] = []
    for report in reports:
        if report.overflow_lines:
            logger.warning(
                "%s: %d lines do not fit on the single page and will not be visible",
                report.filename,
                report.overflow_lines,
            )
        try:
            paths.append(save_document(report.content, reports_dir(request.output_dir), report.filename))
        except OSError as exc:
            logger.error("Failed to save report %s: %s", report.filename, exc)
            return GenerateReportResult(status="failed", paths=paths, error=f"Failed to save report: {exc}")
    return GenerateReportResult(status="generated", paths=paths)
