from pydantic import AfterValidator, BaseModel, Field, PositiveInt, field_validator
from typing import Annotated, Optional, List
from datetime import datetime

from .common import CamelModel, Pagination


def unique_ids(ids: List[int]) -> List[int]:
    """Убрать повторы, сохранив порядок"""
    return list(dict.fromkeys(ids))


CategoryIds = Annotated[List[PositiveInt], AfterValidator(unique_ids)]


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str = ""
    quantity: int
    categories: List[str] = []
    category_ids: List[int] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductPage(BaseModel):
    products: List[ProductResponse]
    pagination: Pagination


class ProductFilters(BaseModel):
    """Фильтры списка товаров (уже нормализованные)"""
    search: str = Field(default="", max_length=255)
    category_ids: CategoryIds = []
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @field_validator("search", mode="before")
    @classmethod
    def strip_search(cls, value):
        return (value or "").strip()


class ProductWrite(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default="", max_length=1000)
    quantity: int = Field(ge=0)
    category_ids: CategoryIds = Field(alias="categoryIds", min_length=1)

    class Config:
        str_strip_whitespace = True
        populate_by_name = True


class ProductCreate(ProductWrite):
    pass


class ProductUpdate(ProductWrite):
    """Полная замена полей и набора категорий"""


class ProductStats(BaseModel):
    total_products: int = 0
    total_quantity: int = 0
    avg_quantity: float = 0.0
    min_quantity: int = 0
    max_quantity: int = 0
    low_stock_count: int = 0


class BulkDeleteRequest(BaseModel):
    ids: List[int] = Field(min_length=1)


class BulkDeleteItem(BaseModel):
    id: int
    deleted: bool
    error: Optional[str] = None


class BulkDeleteResult(CamelModel):
    deleted_count: int
    total_requested: int
    results: List[BulkDeleteItem]
