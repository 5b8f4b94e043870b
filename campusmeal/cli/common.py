"""Shared helpers for CLI command handlers."""

import argparse
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from campusmeal.domain.models import Session
from campusmeal.runtime import CampusApiClient, Settings, get_logger, get_settings

logger = get_logger(__name__)


def decimal_arg(value: str) -> Decimal:
    """argparse type for monetary amounts."""
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"not a finite number: {value!r}")
    return amount


def settings_for(args: argparse.Namespace) -> Settings:
    """Copy of the shared settings with command-line overrides applied."""
    overrides: dict[str, Any] = {}
    if getattr(args, "api_url", None):
        overrides["api_url"] = args.api_url
    if getattr(args, "token", None):
        overrides["token"] = args.token
    if getattr(args, "user_id", None):
        overrides["user_id"] = args.user_id
    if getattr(args, "output_dir", None):
        overrides["output_dir"] = Path(args.output_dir)
    return replace(get_settings(), **overrides)


def open_client(settings: Settings) -> CampusApiClient:
    return CampusApiClient(settings.api_url, token=settings.token, timeout=settings.timeout)


def resolve_session(client: CampusApiClient, settings: Settings) -> Session | None:
    """Load the caller's session, printing why when it cannot be built."""
    from campusmeal.application.student.dashboard import build_session
    from campusmeal.domain.parsing import ResponseSchemaError
    from campusmeal.runtime import ApiError

    if not settings.token or not settings.user_id:
        print("Not signed in: provide --token and --user-id (or CAMPUSMEAL_TOKEN / CAMPUSMEAL_USER_ID).")
        return None

    try:
        return build_session(client, settings.token, settings.user_id)
    except (ApiError, ResponseSchemaError) as exc:
        logger.error("Unable to load session: %s", exc)
        print(f"Unable to load your account: {exc}")
        return None


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on stdin; anything but 'y' is a no."""
    print(f"{prompt} [y/N] ", end="")
    return input().strip().lower() == "y"
