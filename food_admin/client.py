# food_admin/client.py
import json
import logging
from enum import Enum
from typing import Any, AsyncGenerator, List, Optional

import httpx
from fastapi import Depends
from pydantic import ValidationError

from .config import Settings, get_settings
from .errors import DecodeError, HttpError, NetworkError
from .schemas import CategoryStats, Order, User

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class Resource(str, Enum):
    USERS = "users"
    ORDERS = "orders"
    CATEGORY_STATS = "categoryStats"
    DELETE_USER = "deleteUser"

    @property
    def method(self) -> str:
        return "DELETE" if self is Resource.DELETE_USER else "GET"

    @property
    def path(self) -> str:
        return _PATHS[self]

    @property
    def failure_message(self) -> str:
        return _FAILURE_MESSAGES[self]


_PATHS = {
    Resource.USERS: "/api/users",
    Resource.ORDERS: "/api/orders",
    Resource.CATEGORY_STATS: "/api/add-new/category-stats",
    Resource.DELETE_USER: "/api/user",
}

_FAILURE_MESSAGES = {
    Resource.USERS: "Failed to fetch users",
    Resource.ORDERS: "Failed to fetch orders",
    Resource.CATEGORY_STATS: "Failed to fetch category statistics",
    Resource.DELETE_USER: "Failed to delete user",
}


def _server_message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("error", "message"):
            value = payload.get(key)
            if value:
                return str(value)
    return None


class BackendClient:
    """Thin async client for the food-ordering backend.

    The origin is injected at construction. Each call is one independent
    request/response round trip: no retries, no caching, the transport's
    default timeout applies. Failures are raised as :class:`FetchError`
    subclasses.
    """

    def __init__(self, base_url: str, http: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self._http = http
        self._owns_http = http is None

    async def __aenter__(self) -> "BackendClient":
        if self._http is None:
            self._http = httpx.AsyncClient()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient()
            self._owns_http = True
        return self._http

    async def fetch(self, resource: Resource, email: Optional[str] = None) -> Any:
        """Perform the request for ``resource`` and return the decoded JSON body."""
        url = f"{self.base_url}{resource.path}"
        kwargs = {"headers": JSON_HEADERS}
        if resource is Resource.DELETE_USER:
            # httpx.delete() takes no body, so go through request()
            kwargs["content"] = json.dumps({"email": email})

        try:
            response = await self._client().request(resource.method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkError(f"{resource.failure_message}: {exc}", resource=resource.value) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            if not response.is_success:
                raise HttpError(
                    resource.failure_message,
                    status_code=response.status_code,
                    resource=resource.value,
                ) from exc
            raise DecodeError(
                f"{resource.failure_message}: response is not valid JSON",
                resource=resource.value,
            ) from exc

        if not response.is_success:
            raise HttpError(
                resource.failure_message,
                status_code=response.status_code,
                resource=resource.value,
                server_message=_server_message(payload),
                payload=payload,
            )

        logger.debug("%s %s -> %s", resource.method, url, response.status_code)
        return payload

    async def get_users(self) -> List[User]:
        payload = await self.fetch(Resource.USERS)
        return _parse_many(User, payload, Resource.USERS)

    async def get_orders(self) -> List[Order]:
        payload = await self.fetch(Resource.ORDERS)
        return _parse_many(Order, payload, Resource.ORDERS)

    async def get_category_stats(self) -> CategoryStats:
        payload = await self.fetch(Resource.CATEGORY_STATS)
        try:
            return CategoryStats.model_validate(payload)
        except ValidationError as exc:
            raise _unexpected_payload(Resource.CATEGORY_STATS) from exc

    async def delete_user(self, email: str) -> Optional[str]:
        """Delete the user with ``email``; return the backend's message, if any."""
        payload = await self.fetch(Resource.DELETE_USER, email=email)
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return None


def _unexpected_payload(resource: Resource) -> DecodeError:
    return DecodeError(f"{resource.failure_message}: unexpected payload", resource=resource.value)


def _parse_many(model, payload: Any, resource: Resource) -> list:
    if not isinstance(payload, list):
        raise _unexpected_payload(resource)
    try:
        return [model.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise _unexpected_payload(resource) from exc


async def get_backend_client(settings: Settings = Depends(get_settings)) -> AsyncGenerator[BackendClient, None]:
    async with BackendClient(settings.backend_url) as client:
        yield client
