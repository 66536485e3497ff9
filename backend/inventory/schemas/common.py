from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class CamelModel(BaseModel):
    """Поля наружу отдаются в camelCase, как ждёт фронтенд"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "Success"
    data: Optional[T] = None


class PaginatedResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "Success"
    data: List[T]
    pagination: Pagination


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[FieldError]] = None


class SearchResult(BaseModel):
    """Автодополнение: только id и имя"""
    id: int
    name: str

    class Config:
        from_attributes = True
