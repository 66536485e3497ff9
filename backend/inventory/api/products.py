from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlmodel import Session
from typing import List, Optional

from inventory.api.deps import get_db, get_product_filters
from inventory.core.config import settings
from inventory.repositories import ProductRepository
from inventory.schemas.common import ApiResponse, PaginatedResponse, SearchResult
from inventory.schemas.product import (
    ProductResponse, ProductFilters, ProductCreate, ProductUpdate, ProductStats,
    BulkDeleteRequest, BulkDeleteResult,
)
from inventory.services import products as product_service

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=PaginatedResponse[ProductResponse])
def list_products(
    filters: ProductFilters = Depends(get_product_filters),
    db: Session = Depends(get_db)
):
    """Список товаров с поиском, фильтром по категориям и пагинацией"""
    page = ProductRepository(db).list_all(filters)
    return PaginatedResponse[ProductResponse](
        message="Products retrieved successfully",
        data=page.products,
        pagination=page.pagination,
    )


@router.get("/search", response_model=ApiResponse[List[SearchResult]])
def search_products(
    q: Optional[str] = Query(None, max_length=255),
    limit: int = Query(settings.SEARCH_RESULT_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db)
):
    """Автодополнение по имени"""
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Search query is required")

    results = ProductRepository(db).search_by_name(q.strip(), limit)
    return ApiResponse[List[SearchResult]](message="Search results retrieved successfully", data=results)


@router.get("/stats", response_model=ApiResponse[ProductStats])
def get_product_stats(db: Session = Depends(get_db)):
    stats = ProductRepository(db).get_stats()
    return ApiResponse[ProductStats](message="Product statistics retrieved successfully", data=stats)


@router.get("/{product_id}", response_model=ApiResponse[ProductResponse])
def get_product(product_id: int = Path(gt=0), db: Session = Depends(get_db)):
    product = product_service.get_product(db, product_id)
    return ApiResponse[ProductResponse](message="Product retrieved successfully", data=product)


@router.post("", response_model=ApiResponse[ProductResponse], status_code=201)
def create_product(data: ProductCreate, db: Session = Depends(get_db)):
    product = product_service.create_product(db, data)
    return ApiResponse[ProductResponse](message="Product created successfully", data=product)


@router.put("/{product_id}", response_model=ApiResponse[ProductResponse])
def update_product(
    data: ProductUpdate,
    product_id: int = Path(gt=0),
    db: Session = Depends(get_db)
):
    """Полное обновление, включая весь набор категорий"""
    product = product_service.update_product(db, product_id, data)
    return ApiResponse[ProductResponse](message="Product updated successfully", data=product)


@router.delete("/{product_id}", response_model=ApiResponse[None])
def delete_product(product_id: int = Path(gt=0), db: Session = Depends(get_db)):
    product_service.delete_product(db, product_id)
    return ApiResponse[None](message="Product deleted successfully")


@router.post("/bulk-delete", response_model=ApiResponse[BulkDeleteResult])
def bulk_delete_products(data: BulkDeleteRequest, db: Session = Depends(get_db)):
    """Массовое удаление"""
    result = product_service.bulk_delete_products(db, data.ids)
    return ApiResponse[BulkDeleteResult](
        message=f"{result.deleted_count} products deleted successfully",
        data=result,
    )
