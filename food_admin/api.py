# food_admin/api.py
from fastapi import APIRouter, Depends

from .client import BackendClient, get_backend_client
from .config import Settings, get_settings
from .mutations import DashboardSession, UserDeleter
from .notifications import Notifier
from .schemas import DashboardView, DeleteOutcome, DeleteUserRequest

router = APIRouter(prefix="/admin/api", tags=["admin api"])


@router.get("/dashboard", response_model=DashboardView)
async def dashboard_view(
    client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
):
    session = DashboardSession(
        client,
        Notifier(auto_close_ms=settings.toast_auto_close_ms),
        total_reviews=settings.total_reviews,
    )
    return await session.activate()


# 🗑️ Delete user; the outcome (incl. failures) always comes back as 200 with a toast
@router.delete("/user", response_model=DeleteOutcome)
async def delete_user(
    payload: DeleteUserRequest,
    client: BackendClient = Depends(get_backend_client),
    settings: Settings = Depends(get_settings),
):
    deleter = UserDeleter(client, Notifier(auto_close_ms=settings.toast_auto_close_ms))
    return await deleter.delete_user(payload.email, payload.role)
