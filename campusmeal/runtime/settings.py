"""Centralized settings for campusmeal.

Values come from, in increasing precedence: built-in defaults, an optional
TOML config file, and environment variables.

Environment variables:
    CAMPUSMEAL_CONFIG: Path to the TOML config file. Default: ./campusmeal.toml
    CAMPUSMEAL_API_URL: Base URL of the meal-ordering REST API.
    CAMPUSMEAL_TOKEN: Bearer token for authenticated calls.
    CAMPUSMEAL_USER_ID: Default user id for student/admin commands.
    CAMPUSMEAL_TIMEOUT: HTTP timeout in seconds.
    CAMPUSMEAL_OUTPUT_DIR: Directory receipts and reports are written to.

Config file layout:
    [api]
    base_url = "http://localhost:3003"
    timeout = 30

    [output]
    dir = "receipts"

    [[meals]]
    type = "LUNCH"
    label = "Lunch"
    price = "8.50"
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from campusmeal.domain.models import DEFAULT_MEAL_OPTIONS, MealCatalog, MealOption, MealType
from campusmeal.runtime.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "http://localhost:3003"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CONFIG_FILENAME = "campusmeal.toml"


class ConfigError(RuntimeError):
    """Raised when the config file contains invalid values."""


@dataclass
class Settings:
    """Resolved runtime settings."""

    api_url: str = DEFAULT_API_URL
    token: str | None = None
    user_id: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    output_dir: Path = field(default_factory=Path.cwd)
    meal_catalog: MealCatalog = field(default_factory=MealCatalog)

    def __post_init__(self) -> None:
        self.api_url = self.api_url.rstrip("/")
        self.output_dir = Path(self.output_dir).expanduser()


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _parse_meal_options(entries: list[dict[str, Any]]) -> MealCatalog:
    overrides: dict[MealType, MealOption] = {}
    for entry in entries:
        try:
            meal_type = MealType(str(entry["type"]).upper())
            price = Decimal(str(entry["price"]))
        except (KeyError, ValueError, InvalidOperation) as exc:
            raise ConfigError(f"Invalid [[meals]] entry {entry!r}: {exc}") from exc
        label = str(entry.get("label") or meal_type.value.title())
        overrides[meal_type] = MealOption(meal_type, label, price)

    options = tuple(overrides.get(option.meal_type, option) for option in DEFAULT_MEAL_OPTIONS)
    return MealCatalog(options)


def _parse_timeout(raw: object) -> float:
    try:
        timeout = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid timeout: {raw!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive, got {timeout}")
    return timeout


def load_settings(config_path: Path | None = None, environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from the config file and environment.

    Args:
        config_path: TOML path override. If None, uses CAMPUSMEAL_CONFIG or ./campusmeal.toml.
        environ: Environment mapping, defaults to os.environ.
    """
    env = os.environ if environ is None else environ
    if config_path is None:
        config_path = Path(env.get("CAMPUSMEAL_CONFIG", DEFAULT_CONFIG_FILENAME))

    config = _load_toml(config_path)
    api = config.get("api", {})
    output = config.get("output", {})

    settings = Settings(
        api_url=env.get("CAMPUSMEAL_API_URL") or api.get("base_url", DEFAULT_API_URL),
        token=env.get("CAMPUSMEAL_TOKEN") or api.get("token"),
        user_id=env.get("CAMPUSMEAL_USER_ID") or api.get("user_id"),
        timeout=_parse_timeout(env.get("CAMPUSMEAL_TIMEOUT") or api.get("timeout", DEFAULT_TIMEOUT)),
        output_dir=Path(env.get("CAMPUSMEAL_OUTPUT_DIR") or output.get("dir", ".")),
        meal_catalog=_parse_meal_options(config.get("meals", [])),
    )
    logger.debug("Loaded settings: api_url=%s output_dir=%s", settings.api_url, settings.output_dir)
    return settings


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the singleton Settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
