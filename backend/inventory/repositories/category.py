import logging
from typing import Iterable, List, Optional, Set

from sqlalchemy import distinct
from sqlmodel import select, func, col

from inventory.core.errors import CategoryInUseError
from inventory.models.base import utc_now
from inventory.models.category import Category
from inventory.models.product_category import ProductCategory
from inventory.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryResponse, CategoryWithCountResponse,
)
from .base import BaseRepository

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository):
    model = Category
    entity = "category"

    def list_all(self) -> List[CategoryResponse]:
        categories = self.session.exec(select(Category).order_by(Category.id)).all()
        return [CategoryResponse.model_validate(c) for c in categories]

    def list_with_product_count(self) -> List[CategoryWithCountResponse]:
        """Все категории с числом товаров; пустые тоже (count = 0)"""
        product_count = func.count(distinct(ProductCategory.product_id)).label("product_count")
        stmt = (
            select(Category, product_count)
            .outerjoin(ProductCategory, col(ProductCategory.category_id) == Category.id)
            .group_by(Category.id)
            .order_by(Category.name)
        )

        return [
            CategoryWithCountResponse(
                **CategoryResponse.model_validate(category).model_dump(),
                product_count=count,
            )
            for category, count in self.session.exec(stmt).all()
        ]

    def get_by_id(self, category_id: int) -> Optional[CategoryResponse]:
        category = self.session.get(Category, category_id)
        if not category:
            return None
        return CategoryResponse.model_validate(category)

    def create(self, data: CategoryCreate) -> CategoryResponse:
        category = Category(name=data.name, description=data.description or "")
        self.session.add(category)
        self._commit()
        self.session.refresh(category)

        logger.info("Category created: id=%s name=%r", category.id, category.name)
        return self.get_by_id(category.id)

    def update(self, category_id: int, data: CategoryUpdate) -> Optional[CategoryResponse]:
        category = self.session.get(Category, category_id)
        if not category:
            logger.warning("Attempt to update non-existent category id=%s", category_id)
            return None

        category.name = data.name
        category.description = data.description or ""
        category.updated_at = utc_now()
        self.session.add(category)
        self._commit()

        logger.info("Category updated: id=%s", category_id)
        return self.get_by_id(category_id)

    def count_usage(self, category_id: int) -> int:
        stmt = select(func.count()).select_from(ProductCategory).where(
            ProductCategory.category_id == category_id
        )
        return self.session.exec(stmt).one()

    def delete(self, category_id: int) -> bool:
        usage = self.count_usage(category_id)
        if usage > 0:
            logger.warning("Refusing to delete category id=%s used by %s product(s)", category_id, usage)
            raise CategoryInUseError(category_id, usage)

        category = self.session.get(Category, category_id)
        if not category:
            return False

        self.session.delete(category)
        try:
            self._commit()
        except CategoryInUseError as exc:
            # связь появилась между проверкой и DELETE, сработал RESTRICT
            raise CategoryInUseError(category_id, self.count_usage(category_id)) from exc

        logger.info("Category deleted: id=%s", category_id)
        return True

    def missing_ids(self, category_ids: Iterable[int]) -> Set[int]:
        wanted = set(category_ids)
        if not wanted:
            return set()

        found = self.session.exec(select(Category.id).where(col(Category.id).in_(sorted(wanted)))).all()
        return wanted - set(found)

    def validate_ids(self, category_ids: Iterable[int]) -> bool:
        """True, только если список не пуст и все id существуют"""
        category_ids = list(category_ids)
        return bool(category_ids) and not self.missing_ids(category_ids)
