from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, or_, select

from services.category_service.models import Category

from .models import Product

class ProductRepository:

    @staticmethod
    async def save(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def get_latest(db: AsyncSession, limit: int):
        result = await db.execute(
            select(Product).order_by(Product.created_at.desc(), Product.id.desc()).limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def get_product_by_slug(db: AsyncSession, slug: str):
        result = await db.execute(select(Product).where(Product.slug == slug))
        return result.scalars().first()

    @staticmethod
    async def filter_products(db: AsyncSession, category_ids, price_range):
        stmt = select(Product)
        if category_ids:
            stmt = stmt.where(Product.category_id.in_(category_ids))
        if price_range:
            low, high = price_range
            stmt = stmt.where(Product.price >= low, Product.price <= high)
        result = await db.execute(stmt.order_by(Product.id))
        return result.scalars().all()

    @staticmethod
    async def count(db: AsyncSession) -> int:
        result = await db.execute(select(func.count(Product.id)))
        return result.scalar_one()

    @staticmethod
    async def search(db: AsyncSession, keyword: str):
        pattern = f"%{keyword.lower()}%"
        result = await db.execute(
            select(Product)
            .where(or_(func.lower(Product.name).like(pattern), func.lower(Product.description).like(pattern)))
            .order_by(Product.id)
        )
        return result.scalars().all()

    @staticmethod
    async def get_related(db: AsyncSession, product_id: int, category_id: int, limit: int):
        result = await db.execute(
            select(Product)
            .where(Product.category_id == category_id, Product.id != product_id)
            .order_by(Product.id)
            .limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def get_by_category(db: AsyncSession, category: Category):
        result = await db.execute(
            select(Product).where(Product.category_id == category.id).order_by(Product.id)
        )
        return result.scalars().all()

    @staticmethod
    async def delete(db: AsyncSession, product: Product):
        await db.delete(product)
        await db.commit()
