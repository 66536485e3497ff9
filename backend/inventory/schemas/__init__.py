from .common import ApiResponse, PaginatedResponse, Pagination, SearchResult, ErrorResponse
from .category import CategoryResponse, CategoryWithCountResponse, CategoryCreate, CategoryUpdate
from .product import (
    ProductResponse, ProductPage, ProductFilters,
    ProductCreate, ProductUpdate, ProductStats,
    BulkDeleteRequest, BulkDeleteResult,
)

__all__ = [
    "ApiResponse", "PaginatedResponse", "Pagination", "SearchResult", "ErrorResponse",
    "CategoryResponse", "CategoryWithCountResponse", "CategoryCreate", "CategoryUpdate",
    "ProductResponse", "ProductPage", "ProductFilters",
    "ProductCreate", "ProductUpdate", "ProductStats",
    "BulkDeleteRequest", "BulkDeleteResult",
]
