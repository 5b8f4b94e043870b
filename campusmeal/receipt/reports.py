"""Admin report rendering (PDF, CSV, JSON).

Reports are built in memory from already-fetched records; writing them to
disk is left to the caller.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from campusmeal.domain.models import Meal, User
from campusmeal.domain.statistics import Statistics
from campusmeal.receipt.lines import RESTAURANT_NAME, format_timestamp, money
from campusmeal.receipt.pdf import encode, lines_per_page


class ReportType(str, Enum):
    SUMMARY = "summary"
    USERS = "users"
    MEALS = "meals"
    FULL = "full"


class ReportFormat(str, Enum):
    PDF = "pdf"
    CSV = "csv"
    JSON = "json"


MEDIA_TYPES = {
    ReportFormat.PDF: "application/pdf",
    ReportFormat.CSV: "text/csv; charset=utf-8",
    ReportFormat.JSON: "application/json",
}


class ReportError(ValueError):
    """Raised when a report cannot be produced from the given data."""


@dataclass(frozen=True)
class Report:
    """One rendered report file."""

    filename: str
    media_type: str
    content: bytes
    # Lines that did not fit on the single PDF page.
    overflow_lines: int = 0


def report_basename(report_type: ReportType) -> str:
    if report_type is ReportType.FULL:
        return "full_report"
    return f"{report_type.value}_report"


def _filename(base: str, report_format: ReportFormat, today: date) -> str:
    return f"{base}_{today.isoformat()}.{report_format.value}"


def user_row(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "full_name": user.full_name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role,
        "created_at": user.created_at,
    }


def meal_row(meal: Meal) -> dict[str, Any]:
    return {
        "id": meal.id,
        "meal_type": meal.meal_type,
        "status": meal.status,
        "price": meal.price,
        "user_id": meal.user_id,
        "created_at": meal.created_at,
    }


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def render_csv(rows: Sequence[dict[str, Any]]) -> bytes:
    """Render rows as CSV with a header taken from the first row."""
    if not rows:
        raise ReportError("No data to export")
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()), lineterminator="\n", extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({key: "" if value is None else _plain(value) for key, value in row.items()})
    return buffer.getvalue().encode("utf-8")


def render_json(data: dict[str, Any]) -> bytes:
    return json.dumps(data, indent=2, default=_plain).encode("utf-8")


def _date_only(value: datetime | None) -> str:
    return value.date().isoformat() if value is not None else "-"


def summary_lines(statistics: Statistics, generated_at: datetime) -> list[str]:
    lines = [
        f"{RESTAURANT_NAME} - Summary Report",
        f"Generated: {format_timestamp(generated_at)}",
        f"Total Users: {statistics.total_users}",
        f"Total Students: {statistics.total_students}",
        f"Total Meals: {statistics.total_meals}",
        f"Active Meals: {statistics.active_meals}",
        f"Total Revenue: {money(statistics.total_revenue)}",
        f"Wallet Liability: {money(statistics.wallet_liability)}",
    ]
    if statistics.revenue_source == "meal_prices":
        lines.append("Note: finance metrics unavailable; revenue is the sum of meal prices")
    return lines


def users_lines(users: Sequence[User]) -> list[str]:
    lines = ["Users Report", "Name | Email | Phone | Role | Joined"]
    for user in users:
        lines.append(
            " | ".join(
                [user.full_name or "-", user.email, user.phone or "-", user.role, _date_only(user.created_at)]
            )
        )
    return lines


def meals_lines(meals: Sequence[Meal]) -> list[str]:
    lines = ["Meals Report", "Type | Price | Status | Created"]
    for meal in meals:
        lines.append(" | ".join([meal.meal_type, money(meal.price), meal.status, _date_only(meal.created_at)]))
    return lines


def build_report(
    report_type: ReportType,
    report_format: ReportFormat,
    statistics: Statistics,
    users: Sequence[User],
    meals: Sequence[Meal],
    generated_at: datetime,
) -> list[Report]:
    """Render a report; CSV full reports produce one file per dataset."""
    include_summary = report_type in (ReportType.SUMMARY, ReportType.FULL)
    include_users = report_type in (ReportType.USERS, ReportType.FULL)
    include_meals = report_type in (ReportType.MEALS, ReportType.FULL)
    base = report_basename(report_type)
    today = generated_at.date()
    media_type = MEDIA_TYPES[report_format]

    if report_format is ReportFormat.CSV:
        if report_type is ReportType.SUMMARY:
            return [Report(_filename(base, report_format, today), media_type, render_csv([statistics.to_dict()]))]
        datasets = []
        if include_users:
            datasets.append(("users", [user_row(u) for u in users]))
        if include_meals:
            datasets.append(("meals", [meal_row(m) for m in meals]))
        if report_type is ReportType.FULL:
            # One file per non-empty dataset; fail only when there is nothing at all.
            datasets = [(label, rows) for label, rows in datasets if rows]
            if not datasets:
                raise ReportError("No data to export")
        reports = []
        for label, rows in datasets:
            name = f"{base}_{label}" if report_type is ReportType.FULL else base
            reports.append(Report(_filename(name, report_format, today), media_type, render_csv(rows)))
        return reports

    if report_format is ReportFormat.JSON:
        data: dict[str, Any] = {}
        if include_summary:
            data["summary"] = statistics.to_dict()
        if include_users:
            data["users"] = [user_row(u) for u in users]
        if include_meals:
            data["meals"] = [meal_row(m) for m in meals]
        return [Report(_filename(base, report_format, today), media_type, render_json(data))]

    lines: list[str] = []
    if include_summary:
        lines.extend(summary_lines(statistics, generated_at))
    if include_users:
        if lines:
            lines.append("")
        lines.extend(users_lines(users))
    if include_meals:
        if lines:
            lines.append("")
        lines.extend(meals_lines(meals))
    overflow = max(0, len(lines) - lines_per_page())
    return [Report(_filename(base, report_format, today), media_type, encode(lines), overflow_lines=overflow)]
