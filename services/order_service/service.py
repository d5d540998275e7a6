from typing import List, Sequence

import structlog
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.observability import ecomm_order_status_updates_total

from .models import ALLOWED_TRANSITIONS, Order, OrderStatus
from .repository import OrderRepository
from .schemas import BuyerSummary, OrderedProduct, OrderResponse

logger = structlog.get_logger(__name__)


class OrderService:
    @staticmethod
    async def record_paid_order(
        db: AsyncSession,
        buyer_id: int,
        product_ids: List[int],
        payment: dict,
        transaction_id: str | None,
    ) -> Order:
        order = Order(
            products=list(product_ids),
            payment=payment,
            buyer_id=buyer_id,
            transaction_id=transaction_id,
        )
        return await OrderRepository.create_for_transaction(db, order)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Order:
        order = await OrderRepository.get_order(db, order_id)
        if not order:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
        return order

    @staticmethod
    async def list_for_buyer(db: AsyncSession, buyer_id: int) -> List[OrderResponse]:
        orders = await OrderRepository.list_by_buyer(db, buyer_id)
        return await OrderService.populate(db, orders)

    @staticmethod
    async def list_all(db: AsyncSession) -> List[OrderResponse]:
        orders = await OrderRepository.list_all(db)
        return await OrderService.populate(db, orders)

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, new_status: OrderStatus) -> OrderResponse:
        order = await OrderService.get_order(db, order_id)
        current = OrderStatus(order.status)
        if new_status not in ALLOWED_TRANSITIONS[current]:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Cannot move order from {current.value} to {new_status.value}",
            )
        order = await OrderRepository.update_status(db, order, new_status)
        ecomm_order_status_updates_total.labels(status=new_status.value).inc()
        logger.info("order_status_updated", order_id=order.id, previous=current.value, status=new_status.value)
        populated = await OrderService.populate(db, [order])
        return populated[0]

    @staticmethod
    async def populate(db: AsyncSession, orders: Sequence[Order]) -> List[OrderResponse]:
        """Resolves buyer and product references; dangling product ids are dropped."""
        products = await OrderRepository.get_products(
            db, (pid for order in orders for pid in order.products or [])
        )
        buyers = await OrderRepository.get_buyers(db, (order.buyer_id for order in orders))

        populated = []
        for order in orders:
            buyer = buyers.get(order.buyer_id)
            populated.append(
                OrderResponse(
                    id=order.id,
                    status=order.status,
                    buyer=BuyerSummary.model_validate(buyer) if buyer else None,
                    products=[
                        OrderedProduct.model_validate(products[pid])
                        for pid in order.products or []
                        if pid in products
                    ],
                    payment=order.payment,
                    transaction_id=order.transaction_id,
                    created_at=order.created_at,
                    updated_at=order.updated_at,
                )
            )
        return populated
