from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from .models import OrderStatus


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class BuyerSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class OrderedProduct(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: str
    price: float


class OrderResponse(BaseModel):
    id: int
    status: OrderStatus
    buyer: Optional[BuyerSummary] = None
    products: List[OrderedProduct] = []
    payment: Optional[dict[str, Any]] = None
    transaction_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
