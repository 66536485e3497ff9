"""
Сценарии для товаров.

Уникальность имени и существование категорий проверяются здесь,
до открытия транзакции в репозитории.
"""
import logging
from typing import List, Sequence

from sqlmodel import Session

from inventory.core.errors import (
    DuplicateNameError, InvalidCategoryReferenceError, InventoryError, NotFoundError,
)
from inventory.repositories import CategoryRepository, ProductRepository
from inventory.schemas.product import (
    ProductCreate, ProductUpdate, ProductResponse, BulkDeleteItem, BulkDeleteResult,
)

logger = logging.getLogger(__name__)


def ensure_categories_exist(db: Session, category_ids: Sequence[int]) -> None:
    if not category_ids:
        raise InvalidCategoryReferenceError(message="At least one category must be selected")

    missing = CategoryRepository(db).missing_ids(category_ids)
    if missing:
        logger.warning("Unknown category ids referenced: %s", sorted(missing))
        raise InvalidCategoryReferenceError(missing)


def get_product(db: Session, product_id: int) -> ProductResponse:
    product = ProductRepository(db).get_by_id(product_id)
    if product is None:
        raise NotFoundError.for_entity("product")
    return product


def create_product(db: Session, data: ProductCreate) -> ProductResponse:
    repo = ProductRepository(db)
    if repo.name_exists(data.name):
        raise DuplicateNameError.for_entity("product")

    ensure_categories_exist(db, data.category_ids)
    return repo.create(data)


def update_product(db: Session, product_id: int, data: ProductUpdate) -> ProductResponse:
    repo = ProductRepository(db)
    if repo.get_by_id(product_id) is None:
        raise NotFoundError.for_entity("product")

    if repo.name_exists(data.name, exclude_id=product_id):
        raise DuplicateNameError.for_entity("product")

    ensure_categories_exist(db, data.category_ids)

    product = repo.update(product_id, data)
    if product is None:
        raise NotFoundError.for_entity("product")
    return product


def delete_product(db: Session, product_id: int) -> None:
    if not ProductRepository(db).delete(product_id):
        raise NotFoundError.for_entity("product")


def bulk_delete_products(db: Session, ids: List[int]) -> BulkDeleteResult:
    """Каждый id удаляется отдельно; ошибка по одному не отменяет остальные"""
    repo = ProductRepository(db)
    results = []

    for product_id in ids:
        try:
            results.append(BulkDeleteItem(id=product_id, deleted=repo.delete(product_id)))
        except InventoryError as exc:
            logger.warning("Bulk delete failed for product id=%s: %s", product_id, exc.message)
            results.append(BulkDeleteItem(id=product_id, deleted=False, error=exc.message))

    deleted_count = sum(1 for item in results if item.deleted)
    return BulkDeleteResult(deleted_count=deleted_count, total_requested=len(ids), results=results)
