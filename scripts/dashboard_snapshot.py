"""Print the admin dashboard metrics for a running backend.

Handy for checking that the backend answers the way the dashboard expects
without opening a browser.

Usage:
    python scripts/dashboard_snapshot.py [BACKEND_URL]

The backend origin defaults to FOOD_ADMIN_BACKEND_URL (or http://localhost:5000).
"""
import asyncio
import sys

from food_admin.aggregator import recent_orders
from food_admin.client import BackendClient
from food_admin.config import get_settings
from food_admin.mutations import DashboardSession
from food_admin.notifications import Notifier
from food_admin.schemas import Phase


async def snapshot(backend_url: str, total_reviews: int, days: int) -> int:
    async with BackendClient(backend_url) as client:
        session = DashboardSession(client, Notifier(), total_reviews=total_reviews)
        view = await session.activate()

    if view.phase is Phase.ERROR:
        print(f"Dashboard error: {view.error}")
        return 1

    m = view.metrics
    print(f"Backend: {backend_url}")
    print(f"  Earnings (Total): {m.total_earnings}")
    print(f"  Total Orders:     {m.total_orders}")
    print(f"  Total Users:      {m.total_users}")
    print(f"  Pending Orders:   {m.pending_orders}")
    print(f"  Total Products:   {m.total_products}")
    print(f"  User roles:       {m.user_role_counts}")
    if session.store.failed_resources:
        failed = ", ".join(r.value for r in session.store.failed_resources)
        print(f"  (fallback data used for: {failed})")

    recent = recent_orders(session.store.orders, days=days)
    print(f"\nOrders from the past {days} days: {len(recent)}")
    for order in recent:
        print(f"  {order.created_at:%Y-%m-%d %H:%M}  {order.id}  {order.name}  x{order.quantity}  {order.price}")
    return 0


def main():
    settings = get_settings()
    backend_url = sys.argv[1] if len(sys.argv) > 1 else settings.backend_url
    sys.exit(asyncio.run(snapshot(backend_url, settings.total_reviews, settings.recent_orders_days)))


if __name__ == "__main__":
    main()
