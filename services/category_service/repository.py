from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from .models import Category

class CategoryRepository:

    @staticmethod
    async def save(db: AsyncSession, category: Category):
        db.add(category)
        await db.commit()
        await db.refresh(category)
        return category

    @staticmethod
    async def get_all(db: AsyncSession):
        result = await db.execute(select(Category).order_by(Category.name))
        return result.scalars().all()

    @staticmethod
    async def get_by_id(db: AsyncSession, category_id: int):
        result = await db.execute(select(Category).where(Category.id == category_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_name(db: AsyncSession, name: str):
        result = await db.execute(select(Category).where(Category.name == name))
        return result.scalars().first()

    @staticmethod
    async def get_by_slug(db: AsyncSession, slug: str):
        result = await db.execute(select(Category).where(Category.slug == slug))
        return result.scalars().first()

    @staticmethod
    async def delete(db: AsyncSession, category: Category):
        await db.delete(category)
        await db.commit()
