"""Aggregate statistics for the admin overview."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Literal

from campusmeal.domain.models import FinanceMetrics, Meal, User

RevenueSource = Literal["finance", "meal_prices"]


@dataclass(frozen=True)
class Statistics:
    """Headline numbers shown on the admin overview and summary report."""

    total_users: int
    total_students: int
    total_meals: int
    active_meals: int
    total_revenue: Decimal
    wallet_liability: Decimal
    revenue_source: RevenueSource = "finance"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def fallback_revenue(meals: Sequence[Meal]) -> Decimal:
    """Sum of listed meal prices, used when finance metrics are unavailable."""
    return sum((meal.price for meal in meals), Decimal("0"))


def compute_statistics(
    users: Sequence[User],
    meals: Sequence[Meal],
    finance: FinanceMetrics | None,
) -> Statistics:
    """Aggregate counts over fetched users/meals.

    Revenue comes from ``finance`` when present, even if it is zero. Without
    finance metrics the meal-price sum is substituted and flagged through
    ``revenue_source``; wallet liability is then reported as zero.
    """
    if finance is not None:
        total_revenue = finance.total_revenue
        wallet_liability = finance.wallet_liability
        source: RevenueSource = "finance"
    else:
        total_revenue = fallback_revenue(meals)
        wallet_liability = Decimal("0")
        source = "meal_prices"

    return Statistics(
        total_users=len(users),
        total_students=sum(1 for user in users if user.is_student),
        total_meals=len(meals),
        active_meals=sum(1 for meal in meals if meal.is_active),
        total_revenue=total_revenue,
        wallet_liability=wallet_liability,
        revenue_source=source,
    )
