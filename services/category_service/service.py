from typing import Optional

from fastapi import HTTPException
from slugify import slugify
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Category
from .repository import CategoryRepository
from .schemas import CategoryCreate


class CategoryService:

    @staticmethod
    async def _find_clash(db: AsyncSession, name: str) -> Optional[Category]:
        # Both name and slug are unique; "Home Office" and "home office" share a slug.
        return (
            await CategoryRepository.get_by_name(db, name)
            or await CategoryRepository.get_by_slug(db, slugify(name))
        )

    @staticmethod
    async def create_category(db: AsyncSession, data: CategoryCreate):
        """Returns (category, created); an existing name is not an error."""
        name = data.name.strip()
        existing = await CategoryService._find_clash(db, name)
        if existing:
            return existing, False
        category = Category(name=name, slug=slugify(name))
        return await CategoryRepository.save(db, category), True

    @staticmethod
    async def update_category(db: AsyncSession, category_id: int, data: CategoryCreate):
        category = await CategoryService.get_category(db, category_id)
        name = data.name.strip()
        clash = await CategoryService._find_clash(db, name)
        if clash and clash.id != category.id:
            raise HTTPException(status_code=409, detail="Category Already Exists")
        category.name = name
        category.slug = slugify(name)
        return await CategoryRepository.save(db, category)

    @staticmethod
    async def list_categories(db: AsyncSession):
        return await CategoryRepository.get_all(db)

    @staticmethod
    async def get_category(db: AsyncSession, category_id: int):
        category = await CategoryRepository.get_by_id(db, category_id)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    @staticmethod
    async def get_by_slug(db: AsyncSession, slug: str):
        category = await CategoryRepository.get_by_slug(db, slug)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    @staticmethod
    async def delete_category(db: AsyncSession, category_id: int):
        category = await CategoryService.get_category(db, category_id)
        await CategoryRepository.delete(db, category)
