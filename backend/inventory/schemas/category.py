from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: str = ""
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryWithCountResponse(CategoryResponse):
    product_count: int = 0


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default="", max_length=500)

    class Config:
        str_strip_whitespace = True


class CategoryUpdate(CategoryCreate):
    """Полная замена: все поля обязательны так же, как при создании"""
