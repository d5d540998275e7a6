from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from services.auth_service.dependencies import get_current_user_id, require_admin
from services.auth_service.models import User

from .schemas import OrderResponse, OrderStatusUpdate
from .service import OrderService

router = APIRouter(tags=["Orders"])


@router.get("/orders", response_model=List[OrderResponse])
async def my_orders(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_for_buyer(db, user_id)


@router.get("/all-orders", response_model=List[OrderResponse])
async def all_orders(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_all(db)


@router.put("/order-status/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.update_status(db, order_id, payload.status)
