from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from services.order_service.schemas import OrderResponse
from services.product_service.schemas import Price


class CartItem(BaseModel):
    """A product snapshot as the storefront captured it at add-to-cart time."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int = Field(alias="_id")
    name: Optional[str] = None
    description: Optional[str] = None
    price: Price


class CheckoutRequest(BaseModel):
    nonce: str = Field(min_length=1)
    cart: List[CartItem]


class ClientTokenResponse(BaseModel):
    clientToken: str


class CheckoutResponse(BaseModel):
    ok: bool = True
    success: bool = True
    message: str = "Payment Completed Successfully"
    order: OrderResponse
