import json

import httpx
import pytest

from food_admin.client import BackendClient

BACKEND_URL = "http://backend.test"

USERS = [
    {"_id": "u1", "fullName": "Asha Rao", "email": "asha@example.com", "role": "Admin"},
    {"_id": "u2", "fullName": "Ravi Kumar", "email": "ravi@example.com", "role": "User"},
    {"_id": "u3", "fullName": "Meena Iyer", "email": "meena@example.com", "role": "User"},
]

ORDERS = [
    {"_id": "o1", "productId": "p1", "name": "Veg Biryani", "price": "120.50", "quantity": 2,
     "status": "Pending", "payment_method": "COD", "createdAt": "2026-10-18T10:00:00Z"},
    {"_id": "o2", "productId": "p2", "name": "Cold Coffee", "price": 80, "quantity": "1",
     "status": "Delivered", "payment_method": "UPI", "createdAt": "2026-10-01T09:30:00Z"},
    {"_id": "o3", "productId": "p1", "name": "Veg Biryani", "price": 120.5, "quantity": 1,
     "status": "pending", "payment_method": "Card", "createdAt": "2026-10-17T20:15:00Z"},
]

CATEGORY_STATS = {"labels": ["Combo", "Drinks"], "data": [12, 7]}


class FakeBackend:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.set("GET", "/api/users", json=USERS)
        self.set("GET", "/api/orders", json=ORDERS)
        self.set("GET", "/api/add-new/category-stats", json=CATEGORY_STATS)
        self.set("DELETE", "/api/user", json={"message": "User removed"})

    def set(self, method, path, status=200, json=None, content=None, exc=None):
        self.routes[(method, path)] = (status, json, content, exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        status, body, content, exc = route
        if exc is not None:
            raise exc
        if content is not None:
            return httpx.Response(status, content=content)
        return httpx.Response(status, json=body)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def json_body(request):
        return json.loads(request.content)

    def client(self) -> BackendClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return BackendClient(BACKEND_URL, http=http)


@pytest.fixture
def backend():
    return FakeBackend()
