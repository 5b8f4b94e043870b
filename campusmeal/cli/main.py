#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence

from campusmeal.cli.common import decimal_arg
from campusmeal.domain.models import MealType, PaymentMethod
from campusmeal.receipt.reports import ReportFormat, ReportType

Command = Callable[[argparse.Namespace], int]


def _connection_options() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("--api-url", default=None, help="REST API base URL (default: CAMPUSMEAL_API_URL or config)")
    parent.add_argument("--token", default=None, help="Bearer token (default: CAMPUSMEAL_TOKEN)")
    parent.add_argument("--user-id", default=None, help="Signed-in user id (default: CAMPUSMEAL_USER_ID)")
    return parent


def _output_options() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("--output-dir", default=None, help="Directory for saved files (default: CAMPUSMEAL_OUTPUT_DIR)")
    return parent


def _resolve_command(name: str) -> Command:
    if name in {"dashboard", "book", "top-up", "receipt", "serve"}:
        from campusmeal.cli import student

        return {
            "dashboard": student.cmd_dashboard,
            "book": student.cmd_book,
            "top-up": student.cmd_top_up,
            "receipt": student.cmd_receipt,
            "serve": student.cmd_serve,
        }[name]

    from campusmeal.cli import admin

    return {
        "stats": admin.cmd_stats,
        "users": admin.cmd_users,
        "meals": admin.cmd_meals,
        "delete-user": admin.cmd_delete_user,
        "delete-meal": admin.cmd_delete_meal,
        "report": admin.cmd_report,
    }[name]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="campusmeal",
        description="Campus meal-ordering client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Student commands:
  dashboard                  Show balance and booking history
  book <meal_type>           Book a meal and confirm payment
  top-up <amount>            Add funds to the wallet
  receipt <booking_id>       Save a booking receipt as PDF
  serve [--port]             Start the receipt rendering server

Admin commands:
  stats                      Show overview statistics
  users [--page]             List users
  meals [--page]             List meals
  delete-user <id>           Delete a user
  delete-meal <id>           Delete a meal
  report <type> [--format]   Export a summary/users/meals/full report
""",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    conn = _connection_options()
    output = _output_options()
    meal_types = [m.value for m in MealType]
    methods = [m.value for m in PaymentMethod]

    subparsers.add_parser("dashboard", parents=[conn], help="Show balance and booking history")

    book_parser = subparsers.add_parser("book", parents=[conn, output], help="Book a meal and confirm payment")
    book_parser.add_argument("meal_type", type=str.upper, choices=meal_types, help="Meal to book")
    book_parser.add_argument("--method", choices=methods, default=PaymentMethod.CASH.value, help="Payment method")
    book_parser.add_argument("--amount", type=decimal_arg, default=None, help="Amount paid (default: meal price)")
    book_parser.add_argument("--mobile-number", default=None, help="Mobile money number (MOBILE_MONEY only)")
    book_parser.add_argument("--save-receipt", action="store_true", help="Save the payment confirmation as PDF")

    top_up_parser = subparsers.add_parser("top-up", parents=[conn], help="Add funds to the wallet")
    top_up_parser.add_argument("amount", type=decimal_arg, help="Amount to add")
    top_up_parser.add_argument("--method", choices=methods, default=PaymentMethod.MOBILE_MONEY.value)
    top_up_parser.add_argument("--mobile-number", default=None, help="Mobile money number")
    top_up_parser.add_argument("--reference", default=None, help="Payment provider reference")
    top_up_parser.add_argument("--note", default=None, help="Free-text note")

    receipt_parser = subparsers.add_parser("receipt", parents=[conn, output], help="Save a booking receipt as PDF")
    receipt_parser.add_argument("booking_id", help="Booking id")

    serve_parser = subparsers.add_parser("serve", help="Start the receipt rendering server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    subparsers.add_parser("stats", parents=[conn], help="Show overview statistics")
    for name, noun in (("users", "users"), ("meals", "meals")):
        listing = subparsers.add_parser(name, parents=[conn], help=f"List {noun}")
        listing.add_argument("--page", type=int, default=1, help="Page number (10 per page)")

    for name, noun in (("delete-user", "user"), ("delete-meal", "meal")):
        delete = subparsers.add_parser(name, parents=[conn], help=f"Delete a {noun}")
        delete.add_argument("target_id", help=f"{noun.capitalize()} id")
        delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    report_parser = subparsers.add_parser("report", parents=[conn, output], help="Export a report")
    report_parser.add_argument("report_type", choices=[t.value for t in ReportType], help="Report contents")
    report_parser.add_argument(
        "--format", choices=[f.value for f in ReportFormat], default=ReportFormat.PDF.value, help="Output format"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if getattr(args, "page", 1) < 1:
        print("--page must be 1 or greater")
        return 1

    command = _resolve_command(args.command)
    return command(args)


if __name__ == "__main__":
    raise SystemExit(main())
