"""Administrator command handlers used by the unified CLI."""

import argparse
from datetime import datetime

from campusmeal.cli.common import confirm, open_client, resolve_session, settings_for
from campusmeal.receipt.lines import money
from campusmeal.receipt.reports import ReportFormat, ReportType
from campusmeal.runtime import get_logger

logger = get_logger(__name__)


def _date(value: datetime | None) -> str:
    return value.date().isoformat() if value is not None else "-"


def cmd_stats(args: argparse.Namespace) -> int:
    from campusmeal.application.admin.statistics import run_load_statistics

    settings = settings_for(args)
    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        result = run_load_statistics(client, session)

    if result.status != "loaded" or result.statistics is None:
        print(f"Error: {result.error}")
        return 1

    stats = result.statistics
    print("=" * 40)
    print(f"Total Users:      {stats.total_users}")
    print(f"Total Students:   {stats.total_students}")
    print(f"Total Meals:      {stats.total_meals}")
    print(f"Active Meals:     {stats.active_meals}")
    print(f"Total Revenue:    {money(stats.total_revenue)}")
    print(f"Wallet Liability: {money(stats.wallet_liability)}")
    print("=" * 40)
    if stats.revenue_source == "meal_prices":
        print("Note: finance metrics unavailable; revenue is the sum of meal prices.")
    return 0


def cmd_users(args: argparse.Namespace) -> int:
    from campusmeal.application.admin.listing import run_list_users

    settings = settings_for(args)
    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        result = run_list_users(client, session, page=args.page)

    if result.status != "loaded" or result.page is None or result.window is None:
        print(f"Error: {result.error}")
        return 1

    for user in result.page.items:
        print(
            f"  {user.id}  {user.full_name or '-':<24} {user.email:<30} "
            f"{user.phone or '-':<14} {user.role:<10} {_date(user.created_at)}"
        )
    print(result.window.describe("users"))
    return 0


def cmd_meals(args: argparse.Namespace) -> int:
    from campusmeal.application.admin.listing import run_list_meals

    settings = settings_for(args)
    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        result = run_list_meals(client, session, page=args.page)

    if result.status != "loaded" or result.page is None or result.window is None:
        print(f"Error: {result.error}")
        return 1

    for meal in result.page.items:
        print(f"  {meal.id}  {meal.meal_type:<10} {money(meal.price):>8}  {meal.status:<10} {_date(meal.created_at)}")
    print(result.window.describe("meals"))
    return 0


def _cmd_delete(args: argparse.Namespace, kind: str) -> int:
    from campusmeal.application.admin.listing import run_delete_meal, run_delete_user

    if not args.yes and not confirm(f"Are you sure you want to delete this {kind}?"):
        logger.info("Aborted by user")
        return 0

    settings = settings_for(args)
    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        if kind == "user":
            result = run_delete_user(client, session, args.target_id)
        else:
            result = run_delete_meal(client, session, args.target_id)

    if result.status != "deleted":
        print(f"Error: {result.error}")
        return 1
    print(f"{kind.capitalize()} deleted successfully")
    return 0


def cmd_delete_user(args: argparse.Namespace) -> int:
    return _cmd_delete(args, "user")


def cmd_delete_meal(args: argparse.Namespace) -> int:
    return _cmd_delete(args, "meal")


def cmd_report(args: argparse.Namespace) -> int:
    from campusmeal.application.admin.reports import GenerateReportRequest, run_generate_report

    settings = settings_for(args)
    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        result = run_generate_report(
            client,
            GenerateReportRequest(
                session=session,
                report_type=ReportType(args.report_type),
                report_format=ReportFormat(args.format),
                output_dir=settings.output_dir,
            ),
        )

    if result.status != "generated":
        print(f"Error: {result.error}")
        return 1
    for path in result.paths:
        print(f"Report saved: {path}")
    return 0
