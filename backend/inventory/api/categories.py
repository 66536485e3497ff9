from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlmodel import Session
from typing import List, Optional

from inventory.api.deps import get_db
from inventory.core.config import settings
from inventory.repositories import CategoryRepository
from inventory.schemas.common import ApiResponse, SearchResult
from inventory.schemas.category import (
    CategoryResponse, CategoryWithCountResponse, CategoryCreate, CategoryUpdate,
)
from inventory.services import categories as category_service

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=ApiResponse[List[CategoryResponse]])
def list_categories(db: Session = Depends(get_db)):
    """Список всех категорий"""
    categories = CategoryRepository(db).list_all()
    return ApiResponse[List[CategoryResponse]](message="Categories retrieved successfully", data=categories)


@router.get("/with-count", response_model=ApiResponse[List[CategoryWithCountResponse]])
def list_categories_with_count(db: Session = Depends(get_db)):
    """Категории с количеством товаров"""
    categories = CategoryRepository(db).list_with_product_count()
    return ApiResponse[List[CategoryWithCountResponse]](
        message="Categories with product count retrieved successfully",
        data=categories,
    )


@router.get("/search", response_model=ApiResponse[List[SearchResult]])
def search_categories(
    q: Optional[str] = Query(None, max_length=100),
    limit: int = Query(settings.SEARCH_RESULT_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db)
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    results = CategoryRepository(db).search_by_name(q.strip(), limit)
    return ApiResponse[List[SearchResult]](message="Search results retrieved successfully", data=results)


@router.get("/{category_id}", response_model=ApiResponse[CategoryResponse])
def get_category(category_id: int = Path(gt=0), db: Session = Depends(get_db)):
    category = category_service.get_category(db, category_id)
    return ApiResponse[CategoryResponse](message="Category retrieved successfully", data=category)


@router.post("", response_model=ApiResponse[CategoryResponse], status_code=201)
def create_category(data: CategoryCreate, db: Session = Depends(get_db)):
    category = category_service.create_category(db, data)
    return ApiResponse[CategoryResponse](message="Category created successfully", data=category)


@router.put("/{category_id}", response_model=ApiResponse[CategoryResponse])
def update_category(
    data: CategoryUpdate,
    category_id: int = Path(gt=0),
    db: Session = Depends(get_db)
):
    category = category_service.update_category(db, category_id, data)
    return ApiResponse[CategoryResponse](message="Category updated successfully", data=category)


@router.delete("/{category_id}", response_model=ApiResponse[None])
def delete_category(category_id: int = Path(gt=0), db: Session = Depends(get_db)):
    """Удаление; категорию, привязанную к товарам, удалить нельзя"""
    category_service.delete_category(db, category_id)
    return ApiResponse[None](message="Category deleted successfully")
