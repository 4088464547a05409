from datetime import datetime, timedelta, timezone
from decimal import Decimal

from food_admin import aggregator
from food_admin.schemas import CategoryStats, Order, User

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def orders(*rows):
    return [Order.model_validate(row) for row in rows]


def users(*roles):
    return [User(email=f"user{i}@example.com", role=role) for i, role in enumerate(roles)]


def test_earnings_of_no_orders_is_zero():
    assert aggregator.earnings([]) == 0


def test_earnings_sums_price_times_quantity():
    data = orders(
        {"price": "120.50", "quantity": 2},
        {"price": 80, "quantity": "1"},
        {"price": 0.25, "quantity": 4},
    )
    assert aggregator.earnings(data) == Decimal("322.00")


def test_earnings_treats_non_numeric_values_as_zero():
    data = orders(
        {"price": "abc", "quantity": 3},
        {"price": 10, "quantity": None},
        {"quantity": 2},
        {"price": "NaN", "quantity": 1},
        {"price": True, "quantity": 1},
        {"price": [5], "quantity": 1},
        {"price": 7, "quantity": 2},
    )
    assert aggregator.earnings(data) == Decimal(14)


def test_earnings_truncates_fractional_quantity():
    assert aggregator.earnings(orders({"price": 10, "quantity": "2.9"})) == Decimal(20)


def test_pending_count_is_exact_and_case_sensitive():
    data = orders({"status": "Pending"}, {"status": "pending"}, {"status": "Shipped"}, {})
    assert aggregator.pending_count(data) == 1


def test_distinct_product_count():
    data = orders({"productId": "a"}, {"productId": "a"}, {"productId": "b"})
    assert aggregator.distinct_product_count(data) == 2
    assert aggregator.distinct_product_count([]) == 0


def test_role_histogram():
    assert aggregator.role_histogram(users("Admin", "User", "User")) == {"Admin": 1, "User": 2}


def test_role_histogram_keeps_first_seen_order():
    histogram = aggregator.role_histogram(users("User", "Admin", "User", "Chef"))
    assert list(histogram) == ["User", "Admin", "Chef"]


def test_chart_dataset_maps_stats_one_to_one():
    stats = CategoryStats(labels=["Combo", "Drinks"], data=[12, 7])
    chart = aggregator.chart_dataset(stats)
    assert chart.labels == ["Combo", "Drinks"]
    assert chart.datasets[0].data == [12, 7]
    assert chart.datasets[0].label == "Category on Platform"


def test_chart_dataset_falls_back_without_stats():
    chart = aggregator.chart_dataset(None)
    assert chart.labels == ["Combo", "All-in-1", "Main Course", "Sandwiches", "Drinks", "Desserts", "Ice Creams", "Biryani"]
    assert chart.datasets[0].data == [30, 20, 50, 10, 70, 40, 30, 40]


def test_chart_series_serializes_with_chartjs_keys():
    dumped = aggregator.monthly_sales_chart().model_dump(by_alias=True, exclude_none=True)
    series = dumped["datasets"][0]
    assert series["backgroundColor"] == "rgba(75, 192, 192, 0.2)"
    assert series["borderWidth"] == 2
    assert series["fill"] is True
    assert "tension" in series


def test_role_chart_uses_histogram_order():
    chart = aggregator.role_chart({"User": 2, "Admin": 1})
    assert chart.labels == ["User", "Admin"]
    assert chart.datasets[0].data == [2, 1]


def test_build_metrics():
    data = orders(
        {"productId": "p1", "price": 100, "quantity": 1, "status": "Pending"},
        {"productId": "p2", "price": 50, "quantity": 2, "status": "Delivered"},
    )
    metrics = aggregator.build_metrics(users("Admin", "User"), data, total_reviews=150)
    assert metrics.total_earnings == Decimal(200)
    assert metrics.total_orders == 2
    assert metrics.total_users == 2
    assert metrics.pending_orders == 1
    assert metrics.total_products == 2
    assert metrics.total_reviews == 150
    assert metrics.user_role_counts == {"Admin": 1, "User": 1}


def test_aggregation_is_repeatable():
    data = orders({"productId": "p1", "price": 3, "quantity": 3, "status": "Pending"})
    people = users("User")
    assert aggregator.build_metrics(people, data) == aggregator.build_metrics(people, data)


def test_recent_orders_window_and_sort():
    data = orders(
        {"_id": "old", "createdAt": (NOW - timedelta(days=8)).isoformat()},
        {"_id": "edge", "createdAt": (NOW - timedelta(days=7)).isoformat()},
        {"_id": "yesterday", "createdAt": (NOW - timedelta(days=1)).isoformat()},
        {"_id": "today", "createdAt": (NOW - timedelta(hours=2)).isoformat()},
        {"_id": "three", "createdAt": (NOW - timedelta(days=3)).isoformat()},
    )
    recent = aggregator.recent_orders(data, now=NOW)
    assert [o.id for o in recent] == ["today", "yesterday", "three", "edge"]


def test_recent_orders_drops_orders_without_timestamp():
    data = orders({"_id": "a", "createdAt": "not a date"}, {"_id": "b"}, {"_id": "c", "createdAt": "2026-10-18T00:00:00Z"})
    assert [o.id for o in aggregator.recent_orders(data, now=NOW)] == ["c"]


def test_recent_orders_accepts_naive_now_and_custom_window():
    data = orders({"_id": "a", "createdAt": "2026-10-16T12:00:00"})
    naive_now = NOW.replace(tzinfo=None)
    assert [o.id for o in aggregator.recent_orders(data, now=naive_now, days=7)] == ["a"]
    assert aggregator.recent_orders(data, now=naive_now, days=2) == []


def test_earnings_ignores_values_too_large_to_sum():
    data = orders(
        {"productId": "p", "price": "1e1000000", "quantity": 2},
        {"productId": "q", "price": "9e999999", "quantity": 20},
        {"productId": "r", "price": 5, "quantity": 2},
    )
    assert aggregator.earnings(data) == Decimal(10)


def test_role_histogram_counts_missing_roles_together():
    people = [User(email="a@example.com", role=None), User(email="b@example.com"), User(email="c@example.com", role="User")]
    assert aggregator.role_histogram(people) == {aggregator.NO_ROLE_LABEL: 2, "User": 1}
