# food_admin/pages.py
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .aggregator import recent_orders
from .client import BackendClient, get_backend_client
from .config import Settings, get_settings
from .errors import FetchError
from .mutations import DashboardSession
from .notifications import Notifier

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/admin", tags=["admin pages"])


# 📊 Dashboard
@router.get("", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
):
    session = DashboardSession(
        client,
        Notifier(auto_close_ms=settings.toast_auto_close_ms),
        total_reviews=settings.total_reviews,
    )
    view = await session.activate()
    ctx = {
        "view": view,
        "toast_auto_close_ms": settings.toast_auto_close_ms,
    }
    if view.charts is not None:
        ctx["charts"] = view.charts.model_dump(by_alias=True, exclude_none=True)
    return templates.TemplateResponse(request, "dashboard.html", ctx)


# 🕒 Orders from the last N days
@router.get("/recent-orders", response_class=HTMLResponse)
async def recent_orders_page(
    request: Request,
    client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
):
    try:
        orders = await client.get_orders()
    except FetchError as exc:
        return templates.TemplateResponse(request, "recent_orders.html", {"error": exc.message, "orders": []})

    recent = recent_orders(orders, now=datetime.now(timezone.utc), days=settings.recent_orders_days)
    ctx = {
        "error": None,
        "orders": recent,
        "days": settings.recent_orders_days,
        "storefront_url": settings.storefront_url.rstrip("/"),
    }
    return templates.TemplateResponse(request, "recent_orders.html", ctx)
