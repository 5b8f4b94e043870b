"""Student command handlers used by the unified CLI."""

import argparse

from campusmeal.cli.common import open_client, resolve_session, settings_for
from campusmeal.domain.models import MealType, PaymentMethod
from campusmeal.receipt.lines import format_timestamp, money
from campusmeal.runtime import get_logger

logger = get_logger(__name__)


def cmd_dashboard(args: argparse.Namespace) -> int:
    """Show wallet balance and booking history."""
    from campusmeal.application.student.dashboard import LoadDashboardRequest, run_load_student_dashboard

    settings = settings_for(args)
    if not settings.token or not settings.user_id:
        print("Not signed in: provide --token and --user-id (or CAMPUSMEAL_TOKEN / CAMPUSMEAL_USER_ID).")
        return 1

    with open_client(settings) as client:
        result = run_load_student_dashboard(
            client, LoadDashboardRequest(token=settings.token, user_id=settings.user_id)
        )

    if result.status == "unavailable":
        print(f"API unavailable: {result.error}")
        print(f"Make sure the backend is running at {settings.api_url}.")
        return 1
    if result.status != "loaded" or result.dashboard is None:
        print(f"Failed to load dashboard: {result.error}")
        return 1

    dashboard = result.dashboard
    session = dashboard.session
    print("=" * 60)
    print(f"Student: {session.user.full_name or 'Student'}")
    print(f"Registration No: {session.registration_number}")
    print(f"Balance: {money(dashboard.balance)}")
    print("=" * 60)
    print("\nMeals:")
    for option in settings.meal_catalog:
        print(f"  {option.meal_type.value:<10} {option.label:<10} {money(option.price)}")
    print(f"\nBookings ({len(dashboard.bookings)}):")
    for booking in dashboard.bookings:
        qr = booking.qr_code or "Pending"
        print(
            f"  {booking.id}  {settings.meal_catalog.label_for(booking.meal_type):<10} "
            f"{money(booking.price):>8}  {booking.status:<16} {format_timestamp(booking.created_at)}  QR: {qr}"
        )
    return 0


def cmd_book(args: argparse.Namespace) -> int:
    """Book a meal and confirm payment."""
    from campusmeal.application.student.booking import BookMealRequest, run_book_meal
    from campusmeal.application.student.receipt import save_payment_receipt

    settings = settings_for(args)
    meal_type = MealType(args.meal_type.upper())
    option = settings.meal_catalog.get(meal_type)
    amount = args.amount if args.amount is not None else (option.price if option else None)

    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        result = run_book_meal(
            client,
            BookMealRequest(
                session=session,
                meal_type=meal_type,
                payment_method=PaymentMethod(args.method),
                amount=amount,
                mobile_money_number=args.mobile_number,
                catalog=settings.meal_catalog,
            ),
        )

    if result.status == "payment_failed" and result.booking is not None:
        print(f"Booking {result.booking.id} was created but payment failed: {result.error}")
        return 1
    if result.status != "confirmed" or result.receipt is None:
        print(f"Error: {result.error}")
        return 1

    receipt = result.receipt
    print("Booking confirmed and QR code generated.")
    print(f"  Meal: {receipt.meal_label}")
    print(f"  Paid: {money(receipt.amount_paid)} via {receipt.payment_method}")
    print(f"  QR Code: {receipt.qr_code or 'Pending'}")
    print(f"  Remaining Balance: {money(receipt.remaining_balance)}")
    if args.save_receipt:
        try:
            path = save_payment_receipt(receipt, settings.output_dir)
        except OSError as exc:
            logger.error("Failed to save payment receipt: %s", exc)
            print(f"Booking confirmed, but the receipt could not be saved: {exc}")
            return 1
        print(f"Saved payment receipt: {path}")
    return 0


def cmd_top_up(args: argparse.Namespace) -> int:
    """Add funds to the wallet."""
    from campusmeal.application.student.top_up import TopUpRequest, run_top_up

    settings = settings_for(args)
    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        result = run_top_up(
            client,
            TopUpRequest(
                session=session,
                amount=args.amount,
                payment_method=PaymentMethod(args.method),
                mobile_money_number=args.mobile_number,
                provider_reference=args.reference,
                note=args.note,
            ),
        )

    if result.status != "topped_up":
        print(f"Error: {result.error}")
        return 1
    print(result.message)
    return 0


def cmd_receipt(args: argparse.Namespace) -> int:
    """Save the PDF receipt for one booking."""
    from campusmeal.application.student.receipt import DownloadReceiptRequest, run_download_receipt

    settings = settings_for(args)
    with open_client(settings) as client:
        session = resolve_session(client, settings)
        if session is None:
            return 1
        result = run_download_receipt(
            client,
            DownloadReceiptRequest(
                session=session,
                booking_id=args.booking_id,
                output_dir=settings.output_dir,
                catalog=settings.meal_catalog,
            ),
        )

    if result.status != "saved":
        print(f"Error: {result.error}")
        return 1
    print(f"Saved receipt: {result.path}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the receipt rendering server."""
    import uvicorn

    from campusmeal.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Render endpoints: http://{args.host}:{args.port}/receipt | /receipt/payment")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
    return 0
