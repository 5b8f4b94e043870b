"""Core domain models for campusmeal.

This package provides the pure data models and rules used throughout the
project:
- User, StudentProfile, MealBooking, Meal: API records
- Session: explicit caller context
- wallet and statistics rules

Usage:
    from campusmeal.domain import MealCatalog, Session, wallet_balance
"""

from campusmeal.domain.models import (
    BookingStatus,
    FinanceMetrics,
    Meal,
    MealBooking,
    MealCatalog,
    MealOption,
    MealType,
    Page,
    PaymentConfirmation,
    PaymentMethod,
    PaymentReceipt,
    Session,
    StudentDashboard,
    StudentProfile,
    User,
)
from campusmeal.domain.pagination import PageWindow
from campusmeal.domain.parsing import ResponseSchemaError
from campusmeal.domain.statistics import Statistics, compute_statistics
from campusmeal.domain.wallet import wallet_balance

__all__ = [
    "BookingStatus",
    "FinanceMetrics",
    "Meal",
    "MealBooking",
    "MealCatalog",
    "MealOption",
    "MealType",
    "Page",
    "PageWindow",
    "PaymentConfirmation",
    "PaymentMethod",
    "PaymentReceipt",
    "ResponseSchemaError",
    "Session",
    "Statistics",
    "StudentDashboard",
    "StudentProfile",
    "User",
    "compute_statistics",
    "wallet_balance",
]
