from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from services.auth_service.dependencies import require_admin

from .schemas import CategoryCreate, CategoryResponse, CategoryResult
from .service import CategoryService

router = APIRouter(tags=["Categories"])
admin_router = APIRouter(tags=["Categories"], dependencies=[Depends(require_admin)])
public_router = APIRouter()

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "category", "status": "running"}


@admin_router.post("/create-category", response_model=CategoryResult, status_code=201)
async def create_category(
    payload: CategoryCreate, response: Response, db: AsyncSession = Depends(get_db)
):
    category, created = await CategoryService.create_category(db, payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    message = "New Category Created" if created else "Category Already Exists"
    return CategoryResult(message=message, category=CategoryResponse.model_validate(category))


@admin_router.put("/update-category/{category_id}", response_model=CategoryResult)
async def update_category(
    category_id: int, payload: CategoryCreate, db: AsyncSession = Depends(get_db)
):
    category = await CategoryService.update_category(db, category_id, payload)
    return CategoryResult(
        message="Category Updated Successfully",
        category=CategoryResponse.model_validate(category),
    )


@admin_router.delete("/delete-category/{category_id}", response_model=CategoryResult)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db)):
    await CategoryService.delete_category(db, category_id)
    return CategoryResult(message="Category Deleted Successfully")


@router.get("/get-category", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await CategoryService.list_categories(db)


@router.get("/single-category/{slug}", response_model=CategoryResponse)
async def single_category(slug: str, db: AsyncSession = Depends(get_db)):
    return await CategoryService.get_by_slug(db, slug)
