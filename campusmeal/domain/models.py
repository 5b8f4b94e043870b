"""Data models for the campus meal-ordering API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class MealType(str, Enum):
    """Meal slots offered by the campus restaurant."""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"


class PaymentMethod(str, Enum):
    """Payment methods accepted at booking and top-up time."""

    CASH = "CASH"
    MOBILE_MONEY = "MOBILE_MONEY"
    WALLET = "WALLET"
    CARD = "CARD"


class BookingStatus:
    """Booking lifecycle values reported by the API."""

    PENDING_PAYMENT = "PENDING_PAYMENT"
    PAID = "PAID"
    CONSUMED = "CONSUMED"


ACTIVE_MEAL_STATUS = "ACTIVE"
ADMIN_ROLES = frozenset({"admin", "superadmin"})
STUDENT_ROLES = frozenset({"STUDENT", "STUDENTS"})


@dataclass(frozen=True)
class MealOption:
    """A bookable meal type with its display label and price."""

    meal_type: MealType
    label: str
    price: Decimal


DEFAULT_MEAL_OPTIONS: tuple[MealOption, ...] = (
    MealOption(MealType.BREAKFAST, "Breakfast", Decimal("5")),
    MealOption(MealType.LUNCH, "Lunch", Decimal("8")),
    MealOption(MealType.DINNER, "Dinner", Decimal("10")),
)


@dataclass(frozen=True)
class MealCatalog:
    """Meal options keyed by meal type."""

    options: tuple[MealOption, ...] = DEFAULT_MEAL_OPTIONS

    def get(self, meal_type: MealType | str) -> MealOption | None:
        key = meal_type.value if isinstance(meal_type, MealType) else str(meal_type).upper()
        for option in self.options:
            if option.meal_type.value == key:
                return option
        return None

    def label_for(self, meal_type: MealType | str) -> str:
        """Display label for a meal type, falling back to the raw value."""
        option = self.get(meal_type)
        if option is not None:
            return option.label
        return meal_type.value if isinstance(meal_type, MealType) else str(meal_type)

    def __iter__(self):
        return iter(self.options)


@dataclass(frozen=True)
class User:
    """An account as returned by the user endpoints."""

    id: str
    email: str
    role: str
    full_name: str | None = None
    phone: str | None = None
    created_at: datetime | None = None
    meal_balance: Decimal | None = None

    @property
    def is_admin(self) -> bool:
        return self.role.lower() in ADMIN_ROLES

    @property
    def is_student(self) -> bool:
        return self.role.upper() in STUDENT_ROLES

    @property
    def display_name(self) -> str:
        return self.full_name or self.email


@dataclass(frozen=True)
class StudentProfile:
    """Student record linked to a user account."""

    id: str
    registration_number: str | None = None
    department: str | None = None
    balance: Decimal | None = None


@dataclass(frozen=True)
class MealBooking:
    """A student's booking of one meal."""

    id: str
    meal_type: str
    status: str
    price: Decimal | None
    created_at: datetime
    qr_code: str | None = None
    qr_expires_at: datetime | None = None


@dataclass(frozen=True)
class Meal:
    """A meal record as listed on the admin endpoints."""

    id: str
    meal_type: str
    status: str
    price: Decimal
    created_at: datetime
    user_id: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_MEAL_STATUS


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    total: int
    page: int
    limit: int


@dataclass(frozen=True)
class FinanceMetrics:
    """Authoritative finance figures from the metrics endpoint."""

    total_revenue: Decimal
    wallet_liability: Decimal


@dataclass(frozen=True)
class PaymentConfirmation:
    """Result of confirming payment on a booking."""

    booking: MealBooking
    remaining_balance: Decimal | None = None


@dataclass(frozen=True)
class PaymentReceipt:
    """Flat summary of a confirmed booking payment."""

    meal_type: MealType
    meal_label: str
    payment_method: str
    amount_paid: Decimal
    timestamp: datetime
    qr_code: str | None = None
    mobile_money_number: str | None = None
    remaining_balance: Decimal | None = None


@dataclass(frozen=True)
class Session:
    """Authenticated caller context passed explicitly to every workflow."""

    token: str
    user: User
    student: StudentProfile | None = None

    @property
    def student_id(self) -> str:
        if self.student is not None:
            return self.student.id
        return self.user.id

    @property
    def registration_number(self) -> str:
        if self.student is None:
            return "N/A"
        return self.student.registration_number or self.student.id


@dataclass(frozen=True)
class StudentDashboard:
    """Everything the student views need after a refresh."""

    session: Session
    bookings: list[MealBooking] = field(default_factory=list)
    balance: Decimal = Decimal("0")
