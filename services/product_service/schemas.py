from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from services.category_service.schemas import CategoryResponse


def whole_cents(value: float) -> float:
    """Prices are charged to the cent; anything finer would be rounded away."""
    if Decimal(str(value)).as_tuple().exponent < -2:
        raise ValueError("price must not have more than 2 decimal places")
    return value


Price = Annotated[float, Field(ge=0, allow_inf_nan=False), AfterValidator(whole_cents)]


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: Price
    category: int
    quantity: int = Field(ge=0)
    shipping: bool = False


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    description: str
    price: float
    category_id: int
    quantity: int
    shipping: bool


class ProductResult(BaseModel):
    success: bool = True
    message: str
    product: Optional[ProductResponse] = None


class ProductFilter(BaseModel):
    checked: List[int] = []
    radio: List[float] = []

    @field_validator("radio")
    @classmethod
    def price_range(cls, value):
        if value and len(value) != 2:
            raise ValueError("radio must hold [min, max]")
        return value


class CategoryProducts(BaseModel):
    category: CategoryResponse
    products: List[ProductResponse]
