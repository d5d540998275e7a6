from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from services.auth_service.dependencies import require_admin

from services.category_service.schemas import CategoryResponse

from .schemas import CategoryProducts, ProductCreate, ProductFilter, ProductResponse, ProductResult
from .service import ProductService

router = APIRouter(tags=["Products"])
admin_router = APIRouter(tags=["Products"], dependencies=[Depends(require_admin)])
public_router = APIRouter()  # For any public endpoints (e.g. health check)

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "product", "status": "running"}


@admin_router.post("/create-product", response_model=ProductResult, status_code=201)
async def create_product(payload: ProductCreate, db: AsyncSession = Depends(get_db)):
    product = await ProductService.create_product(db, payload)
    return ProductResult(message="Product Created Successfully", product=ProductResponse.model_validate(product))


@admin_router.put("/update-product/{product_id}", response_model=ProductResult)
async def update_product(
    product_id: int, payload: ProductCreate, db: AsyncSession = Depends(get_db)
):
    product = await ProductService.update_product(db, product_id, payload)
    return ProductResult(message="Product Updated Successfully", product=ProductResponse.model_validate(product))


@admin_router.delete("/delete-product/{product_id}", response_model=ProductResult)
async def delete_product(product_id: int, db: AsyncSession = Depends(get_db)):
    await ProductService.delete_product(db, product_id)
    return ProductResult(message="Product Deleted Successfully")


@router.get("/get-product", response_model=list[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)):
    return await ProductService.list_products(db)


@router.get("/get-product/{slug}", response_model=ProductResponse)
async def get_product(slug: str, db: AsyncSession = Depends(get_db)):
    return await ProductService.get_product_by_slug(db, slug)


@router.post("/product-filters", response_model=list[ProductResponse])
async def filter_products(payload: ProductFilter, db: AsyncSession = Depends(get_db)):
    return await ProductService.filter_products(db, payload)


@router.get("/product-count")
async def product_count(db: AsyncSession = Depends(get_db)):
    return {"success": True, "total": await ProductService.count_products(db)}


@router.get("/search/{keyword}", response_model=list[ProductResponse])
async def search_products(keyword: str, db: AsyncSession = Depends(get_db)):
    return await ProductService.search(db, keyword)


@router.get("/related-product/{product_id}/{category_id}", response_model=list[ProductResponse])
async def related_products(product_id: int, category_id: int, db: AsyncSession = Depends(get_db)):
    return await ProductService.related_products(db, product_id, category_id)


@router.get("/product-category/{slug}", response_model=CategoryProducts)
async def products_in_category(slug: str, db: AsyncSession = Depends(get_db)):
    category, products = await ProductService.products_in_category(db, slug)
    return CategoryProducts(
        category=CategoryResponse.model_validate(category),
        products=[ProductResponse.model_validate(p) for p in products],
    )
