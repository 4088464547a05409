# food_admin/mutations.py
import logging

from .client import BackendClient
from .errors import FetchError, HttpError
from .notifications import Notifier
from .schemas import DeleteOutcome, DashboardView
from .state import DashboardStore

logger = logging.getLogger(__name__)

PROTECTED_ROLE = "Admin"

ADMIN_PROTECTED_MESSAGE = "Admin cannot be deleted!"
DELETE_SUCCESS_MESSAGE = "User deleted successfully"
DELETE_FAILED_MESSAGE = "Failed to delete user"
DELETE_CRASHED_MESSAGE = "An error occurred while deleting the user"


class UserDeleter:
    """Runs the "Delete User" action.

    Admins are never deleted and the backend is not contacted for them. The
    deleter only reports whether the user is gone; removing it from the
    displayed state is up to the caller. Nothing guards against two deletes of
    the same user in flight at once.
    """

    def __init__(self, client: BackendClient, notifier: Notifier):
        self.client = client
        self.notifier = notifier

    async def delete_user(self, email: str, role: str) -> DeleteOutcome:
        if role == PROTECTED_ROLE:
            notification = self.notifier.warning(ADMIN_PROTECTED_MESSAGE)
            return DeleteOutcome(email=email, removed=False, notification=notification)

        try:
            server_message = await self.client.delete_user(email)
        except HttpError as exc:
            notification = self.notifier.error(exc.server_message or DELETE_FAILED_MESSAGE)
            return DeleteOutcome(email=email, removed=False, notification=notification)
        except FetchError as exc:
            # no response, or a 2xx whose body is not JSON
            logger.error("Error deleting user %s: %s", email, exc.detail)
            notification = self.notifier.error(DELETE_CRASHED_MESSAGE)
            return DeleteOutcome(email=email, removed=False, notification=notification)

        notification = self.notifier.success(server_message or DELETE_SUCCESS_MESSAGE)
        return DeleteOutcome(email=email, removed=True, notification=notification)


class DashboardSession:
    """One dashboard activation: a store, the client feeding it and its actions."""

    def __init__(self, client: BackendClient, notifier: Notifier, total_reviews: int = 0):
        self.client = client
        self.notifier = notifier
        self.store = DashboardStore(total_reviews=total_reviews)
        self.deleter = UserDeleter(client, notifier)

    async def activate(self) -> DashboardView:
        await self.store.load(self.client)
        return self.store.view()

    async def delete_user(self, email: str, role: str) -> DeleteOutcome:
        outcome = await self.deleter.delete_user(email, role)
        if outcome.removed:
            self.store.remove_user(email)
        return outcome
