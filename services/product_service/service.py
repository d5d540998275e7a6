from fastapi import HTTPException
from slugify import slugify
from sqlalchemy.ext.asyncio import AsyncSession

from services.category_service.service import CategoryService

from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductFilter

LATEST_LIMIT = 12
RELATED_LIMIT = 3


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate):
        await CategoryService.get_category(db, data.category)
        product = Product(
            name=data.name,
            slug=slugify(data.name),
            description=data.description,
            price=data.price,
            category_id=data.category,
            quantity=data.quantity,
            shipping=data.shipping,
        )
        return await ProductRepository.save(db, product)

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductCreate):
        product = await ProductService.get_product_by_id(db, product_id)
        await CategoryService.get_category(db, data.category)
        product.name = data.name
        product.slug = slugify(data.name)
        product.description = data.description
        product.price = data.price
        product.category_id = data.category
        product.quantity = data.quantity
        product.shipping = data.shipping
        return await ProductRepository.save(db, product)

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int):
        product = await ProductService.get_product_by_id(db, product_id)
        await ProductRepository.delete(db, product)

    @staticmethod
    async def list_products(db: AsyncSession):
        return await ProductRepository.get_latest(db, LATEST_LIMIT)

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    @staticmethod
    async def get_product_by_slug(db: AsyncSession, slug: str):
        product = await ProductRepository.get_product_by_slug(db, slug)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    @staticmethod
    async def filter_products(db: AsyncSession, data: ProductFilter):
        price_range = tuple(data.radio) if data.radio else None
        return await ProductRepository.filter_products(db, data.checked, price_range)

    @staticmethod
    async def count_products(db: AsyncSession) -> int:
        return await ProductRepository.count(db)

    @staticmethod
    async def search(db: AsyncSession, keyword: str):
        return await ProductRepository.search(db, keyword)

    @staticmethod
    async def related_products(db: AsyncSession, product_id: int, category_id: int):
        return await ProductRepository.get_related(db, product_id, category_id, RELATED_LIMIT)

    @staticmethod
    async def products_in_category(db: AsyncSession, slug: str):
        category = await CategoryService.get_by_slug(db, slug)
        products = await ProductRepository.get_by_category(db, category)
        return category, products
