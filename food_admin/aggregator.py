# food_admin/aggregator.py
"""Pure derivations of dashboard metrics and chart datasets.

Nothing here does I/O or keeps state: the same input always gives the same
output, so the store can call these whenever one of its slices changes.
"""
from datetime import datetime, timedelta, timezone
from decimal import Context, Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from .schemas import (
    CategoryStats,
    ChartData,
    ChartSeries,
    DashboardCharts,
    DashboardMetrics,
    Order,
    User,
)

PENDING_STATUS = "Pending"
# histogram bucket for users whose role is null or missing
NO_ROLE_LABEL = "No role"

# values outside this context (e.g. "1e1000000") count as 0 instead of overflowing
_DECIMAL_CONTEXT = Context()

FALLBACK_CATEGORY_STATS = CategoryStats(
    labels=["Combo", "All-in-1", "Main Course", "Sandwiches", "Drinks", "Desserts", "Ice Creams", "Biryani"],
    data=[30, 20, 50, 10, 70, 40, 30, 40],
)

CATEGORY_COLORS = ["#FF6384", "#36A2EB", "#FFCE56", "#4BC0C0", "#AFEEEE", "#FF6384", "#C9CBCF", "#32CD32"]
ROLE_COLORS = ["#F3C65C", "#F7B733", "#FF6B6B", "#6B8E23"]

# the backend has no sales-by-month endpoint; the chart is static
MONTHLY_SALES = {
    "labels": ["January", "February", "March", "April", "May"],
    "data": [5000, 7000, 6000, 8000, 9000],
}


# 🔢 coercion
def _to_decimal(value) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        number = _DECIMAL_CONTEXT.create_decimal(str(value).strip())
    except (ArithmeticError, ValueError):
        return Decimal(0)
    if not number.is_finite():
        return Decimal(0)
    return number


def _to_int(value) -> int:
    return int(_to_decimal(value))


# 📈 metrics
def earnings(orders: Iterable[Order]) -> Decimal:
    """Sum of ``price * quantity``; anything non-numeric counts as 0."""
    total = Decimal(0)
    for order in orders:
        try:
            total = _DECIMAL_CONTEXT.add(
                total, _DECIMAL_CONTEXT.multiply(_to_decimal(order.price), _to_int(order.quantity))
            )
        except ArithmeticError:
            continue
    return total


def pending_count(orders: Iterable[Order]) -> int:
    return sum(1 for order in orders if order.status == PENDING_STATUS)


def distinct_product_count(orders: Iterable[Order]) -> int:
    return len({order.product_id for order in orders})


def role_histogram(users: Iterable[User]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for user in users:
        role = NO_ROLE_LABEL if user.role is None else user.role
        counts[role] = counts.get(role, 0) + 1
    return counts


def build_metrics(users: Sequence[User], orders: Sequence[Order], total_reviews: int = 0) -> DashboardMetrics:
    return DashboardMetrics(
        total_earnings=earnings(orders),
        total_orders=len(orders),
        total_users=len(users),
        pending_orders=pending_count(orders),
        total_products=distinct_product_count(orders),
        total_reviews=total_reviews,
        user_role_counts=role_histogram(users),
    )


# 🥧 charts
def chart_dataset(category_stats: Optional[CategoryStats]) -> ChartData:
    """Category pie data; the fixed fallback is used when no stats were loaded."""
    stats = category_stats or FALLBACK_CATEGORY_STATS
    return ChartData(
        labels=list(stats.labels),
        datasets=[
            ChartSeries(
                label="Category on Platform",
                data=list(stats.data),
                background_color=CATEGORY_COLORS,
                border_color="#fff",
                border_width=2,
            )
        ],
    )


def role_chart(role_counts: Dict[str, int]) -> ChartData:
    return ChartData(
        labels=list(role_counts.keys()),
        datasets=[
            ChartSeries(
                label="User Roles",
                data=list(role_counts.values()),
                background_color=ROLE_COLORS,
                border_color="#fff",
                border_width=1,
            )
        ],
    )


def monthly_sales_chart() -> ChartData:
    return ChartData(
        labels=list(MONTHLY_SALES["labels"]),
        datasets=[
            ChartSeries(
                label="Monthly Sales",
                data=list(MONTHLY_SALES["data"]),
                background_color="rgba(75, 192, 192, 0.2)",
                border_color="rgba(75, 192, 192, 1)",
                border_width=2,
                fill=True,
                tension=0.1,
            )
        ],
    )


def build_charts(users: Sequence[User], category_stats: Optional[CategoryStats]) -> DashboardCharts:
    return DashboardCharts(
        items=chart_dataset(category_stats),
        monthly_sales=monthly_sales_chart(),
        user_roles=role_chart(role_histogram(users)),
    )


# 🕒 recent orders
def recent_orders(orders: Iterable[Order], now: Optional[datetime] = None, days: int = 7) -> List[Order]:
    """Orders created within the last ``days`` days, newest first.

    Orders without a usable ``createdAt`` are left out.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=days)
    recent = [order for order in orders if order.created_at is not None and order.created_at >= cutoff]
    recent.sort(key=lambda order: order.created_at, reverse=True)
    return recent
