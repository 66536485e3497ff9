"""
Репозиторий товаров.

Категории товара не хранятся в самой строке products: они собираются
join'ом по product_categories при каждом чтении, упорядоченные по имени.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import case
from sqlmodel import Session, select, func, col

from inventory.core.config import settings
from inventory.models.base import utc_now
from inventory.models.category import Category
from inventory.models.product import Product
from inventory.models.product_category import ProductCategory
from inventory.schemas.product import (
    ProductCreate, ProductUpdate, ProductResponse, ProductPage, ProductFilters, ProductStats,
)
from .base import BaseRepository
from .pagination import build_pagination, page_offset

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository):
    model = Product
    entity = "product"

    def __init__(self, session: Session, low_stock_threshold: int = settings.LOW_STOCK_THRESHOLD):
        super().__init__(session)
        self.low_stock_threshold = low_stock_threshold

    # === Чтение ===

    def _filter_conditions(self, filters: ProductFilters) -> list:
        conditions = []

        if filters.search:
            conditions.append(col(Product.name).icontains(filters.search, autoescape=True))

        # OR по категориям: достаточно одной связи с любой из запрошенных.
        # Полусоединение через IN не размножает строки товара.
        if filters.category_ids:
            linked = select(ProductCategory.product_id).where(
                col(ProductCategory.category_id).in_(filters.category_ids)
            )
            conditions.append(col(Product.id).in_(linked))

        return conditions

    def list_all(self, filters: ProductFilters) -> ProductPage:
        conditions = self._filter_conditions(filters)

        count_stmt = select(func.count(Product.id)).where(*conditions)
        total_count = self.session.exec(count_stmt).one()

        page_stmt = (
            select(Product)
            .where(*conditions)
            .order_by(col(Product.id).desc())
            .offset(page_offset(filters.page, filters.limit))
            .limit(filters.limit)
        )
        products = self.session.exec(page_stmt).all()

        logger.debug(
            "Products listed: search=%r category_ids=%s page=%s total=%s",
            filters.search, filters.category_ids, filters.page, total_count,
        )

        return ProductPage(
            products=self._with_categories(products),
            pagination=build_pagination(filters.page, filters.limit, total_count),
        )

    def _categories_by_product(self, product_ids: Sequence[int]) -> Dict[int, List[Tuple[int, str]]]:
        if not product_ids:
            return {}

        stmt = (
            select(ProductCategory.product_id, Category.id, Category.name)
            .join(Category, col(Category.id) == ProductCategory.category_id)
            .where(col(ProductCategory.product_id).in_(product_ids))
            .order_by(Category.name)
        )

        grouped: Dict[int, List[Tuple[int, str]]] = defaultdict(list)
        for product_id, category_id, name in self.session.exec(stmt).all():
            grouped[product_id].append((category_id, name))
        return grouped

    def _with_categories(self, products: Sequence[Product]) -> List[ProductResponse]:
        grouped = self._categories_by_product([p.id for p in products])
        return [self._to_response(p, grouped.get(p.id, [])) for p in products]

    @staticmethod
    def _to_response(product: Product, categories: List[Tuple[int, str]]) -> ProductResponse:
        return ProductResponse(
            id=product.id,
            name=product.name,
            description=product.description,
            quantity=product.quantity,
            categories=[name for _, name in categories],
            category_ids=[category_id for category_id, _ in categories],
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def get_by_id(self, product_id: int) -> Optional[ProductResponse]:
        product = self.session.get(Product, product_id)
        if not product:
            return None
        return self._with_categories([product])[0]

    def get_stats(self) -> ProductStats:
        low_stock = func.sum(case((Product.quantity < self.low_stock_threshold, 1), else_=0))
        stmt = select(
            func.count(Product.id),
            func.sum(Product.quantity),
            func.avg(Product.quantity),
            func.min(Product.quantity),
            func.max(Product.quantity),
            low_stock,
        )
        total, total_qty, avg_qty, min_qty, max_qty, low_count = self.session.exec(stmt).one()

        return ProductStats(
            total_products=total or 0,
            total_quantity=int(total_qty or 0),
            avg_quantity=round(float(avg_qty or 0), 2),
            min_quantity=min_qty or 0,
            max_quantity=max_qty or 0,
            low_stock_count=int(low_count or 0),
        )

    # === Запись ===

    def _link_categories(self, product_id: int, category_ids: Sequence[int]) -> None:
        self.session.add_all(
            ProductCategory(product_id=product_id, category_id=category_id)
            for category_id in category_ids
        )
        self.session.flush()

    def _unlink_categories(self, product_id: int) -> None:
        links = self.session.exec(
            select(ProductCategory).where(ProductCategory.product_id == product_id)
        ).all()
        for link in links:
            self.session.delete(link)
        self.session.flush()

    def create(self, data: ProductCreate) -> ProductResponse:
        """Товар и его связи с категориями создаются одной транзакцией"""
        with self._transaction():
            product = Product(
                name=data.name,
                description=data.description or "",
                quantity=data.quantity,
            )
            self.session.add(product)
            self.session.flush()
            product_id = product.id
            self._link_categories(product_id, data.category_ids)

        logger.info("Product created: id=%s categories=%s", product_id, data.category_ids)
        return self.get_by_id(product_id)

    def update(self, product_id: int, data: ProductUpdate) -> Optional[ProductResponse]:
        """Полная замена полей; набор категорий заменяется, а не дополняется"""
        product = self.session.get(Product, product_id)
        if not product:
            logger.warning("Attempt to update non-existent product id=%s", product_id)
            return None

        with self._transaction():
            product.name = data.name
            product.description = data.description or ""
            product.quantity = data.quantity
            product.updated_at = utc_now()
            self.session.add(product)

            self._unlink_categories(product_id)
            self._link_categories(product_id, data.category_ids)

        logger.info("Product updated: id=%s categories=%s", product_id, data.category_ids)
        return self.get_by_id(product_id)

    def delete(self, product_id: int) -> bool:
        product = self.session.get(Product, product_id)
        if not product:
            return False

        with self._transaction():
            self._unlink_categories(product_id)
            self.session.delete(product)

        logger.info("Product deleted: id=%s", product_id)
        return True
