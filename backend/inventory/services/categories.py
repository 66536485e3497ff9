"""
Сценарии для категорий: проверки перед вызовом репозитория.
"""
from sqlmodel import Session

from inventory.core.errors import DuplicateNameError, NotFoundError
from inventory.repositories import CategoryRepository
from inventory.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse


def get_category(db: Session, category_id: int) -> CategoryResponse:
    category = CategoryRepository(db).get_by_id(category_id)
    if category is None:
        raise NotFoundError.for_entity("category")
    return category


def create_category(db: Session, data: CategoryCreate) -> CategoryResponse:
    repo = CategoryRepository(db)
    if repo.name_exists(data.name):
        raise DuplicateNameError.for_entity("category")
    return repo.create(data)


def update_category(db: Session, category_id: int, data: CategoryUpdate) -> CategoryResponse:
    repo = CategoryRepository(db)
    if repo.get_by_id(category_id) is None:
        raise NotFoundError.for_entity("category")

    if repo.name_exists(data.name, exclude_id=category_id):
        raise DuplicateNameError.for_entity("category")

    category = repo.update(category_id, data)
    if category is None:
        raise NotFoundError.for_entity("category")
    return category


def delete_category(db: Session, category_id: int) -> None:
    """CategoryInUseError пробрасывается как есть"""
    repo = CategoryRepository(db)
    if repo.get_by_id(category_id) is None:
        raise NotFoundError.for_entity("category")

    if not repo.delete(category_id):
        raise NotFoundError.for_entity("category")
