# food_admin/schemas.py
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _as_text(value):
    return None if value is None else str(value)


# 👤 User as served by /api/users
class User(BaseModel):
    """A user row. Display fields accept whatever the backend sends; a missing
    ``role`` stays ``None`` so it still gets its own bucket in the role chart.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    full_name: str = Field(default="", alias="fullName")
    email: str = ""
    role: Optional[str] = None

    @field_validator("id", "role", mode="before")
    @classmethod
    def _stringify(cls, value):
        return _as_text(value)

    @field_validator("full_name", "email", mode="before")
    @classmethod
    def _stringify_or_blank(cls, value):
        return "" if value is None else str(value)


# 📦 Order as served by /api/orders
class Order(BaseModel):
    """A single order line.

    ``price`` and ``quantity`` are kept exactly as received; turning them into
    numbers is the aggregator's job. ``created_at`` is parsed leniently and is
    ``None`` when the backend sends something that is not a timestamp.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id")
    product_id: Any = Field(default=None, alias="productId")
    name: Optional[str] = None
    price: Any = None
    quantity: Any = None
    status: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("id", "name", "status", "payment_method", mode="before")
    @classmethod
    def _stringify(cls, value):
        return _as_text(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        if value is None or isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                return None
        return None

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# 📊 /api/add-new/category-stats
class CategoryStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    labels: List[str]
    data: List[float]

    @model_validator(mode="after")
    def _parallel(self):
        if len(self.labels) != len(self.data):
            raise ValueError("labels and data must have the same length")
        return self


class ChartSeries(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    data: List[float]
    background_color: Union[str, List[str]] = Field(alias="backgroundColor")
    border_color: str = Field(alias="borderColor")
    border_width: int = Field(alias="borderWidth")
    fill: Optional[bool] = None
    tension: Optional[float] = None


class ChartData(BaseModel):
    labels: List[str]
    datasets: List[ChartSeries]


class DashboardMetrics(BaseModel):
    total_earnings: Decimal
    total_orders: int
    total_users: int
    pending_orders: int
    total_products: int
    total_reviews: int
    user_role_counts: Dict[str, int]


class DashboardCharts(BaseModel):
    items: ChartData
    monthly_sales: ChartData
    user_roles: ChartData


class Phase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DashboardView(BaseModel):
    phase: Phase
    error: Optional[str] = None
    users: List[User] = []
    metrics: Optional[DashboardMetrics] = None
    charts: Optional[DashboardCharts] = None


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notification(BaseModel):
    level: NotificationLevel
    message: str
    auto_close_ms: int = 3000


class DeleteUserRequest(BaseModel):
    email: str
    role: str = ""


class DeleteOutcome(BaseModel):
    email: str
    removed: bool
    notification: Notification
