from typing import Iterable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import User
from services.product_service.models import Product

from .models import Order


class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order) -> Order:
        db.add(order)
        await db.commit()
        await db.refresh(order)
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Optional[Order]:
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_transaction_id(db: AsyncSession, transaction_id: str) -> Optional[Order]:
        result = await db.execute(select(Order).where(Order.transaction_id == transaction_id))
        return result.scalars().first()

    @staticmethod
    async def create_for_transaction(db: AsyncSession, order: Order) -> Order:
        """
        Inserts the order unless one already exists for the same gateway
        transaction, in which case the stored order is returned unchanged.
        """
        if order.transaction_id:
            existing = await OrderRepository.get_by_transaction_id(db, order.transaction_id)
            if existing:
                return existing
        try:
            return await OrderRepository.create_order(db, order)
        except IntegrityError:
            # Lost a race with a concurrent insert of the same transaction.
            await db.rollback()
            existing = await OrderRepository.get_by_transaction_id(db, order.transaction_id)
            if existing is None:
                raise
            return existing

    @staticmethod
    async def list_by_buyer(db: AsyncSession, buyer_id: int) -> Sequence[Order]:
        result = await db.execute(
            select(Order).where(Order.buyer_id == buyer_id).order_by(Order.id)
        )
        return result.scalars().all()

    @staticmethod
    async def list_all(db: AsyncSession) -> Sequence[Order]:
        result = await db.execute(
            select(Order).order_by(Order.created_at.desc(), Order.id.desc())
        )
        return result.scalars().all()

    @staticmethod
    async def update_status(db: AsyncSession, order: Order, status) -> Order:
        order.status = status
        await db.commit()
        await db.refresh(order)
        return order

    @staticmethod
    async def get_products(db: AsyncSession, product_ids: Iterable[int]) -> dict:
        ids = set(product_ids)
        if not ids:
            return {}
        result = await db.execute(select(Product).where(Product.id.in_(ids)))
        return {p.id: p for p in result.scalars().all()}

    @staticmethod
    async def get_buyers(db: AsyncSession, buyer_ids: Iterable[int]) -> dict:
        ids = {i for i in buyer_ids if i is not None}
        if not ids:
            return {}
        result = await db.execute(select(User).where(User.id.in_(ids)))
        return {u.id: u for u in result.scalars().all()}
