import pytest

from inventory.core.errors import CategoryInUseError, DuplicateNameError, NotFoundError
from inventory.schemas.category import CategoryCreate, CategoryUpdate
from inventory.services import categories as category_service


def test_create_category_strips_and_stores(session):
    category = category_service.create_category(session, CategoryCreate(name="  Office  "))
    assert category.name == "Office"
    assert category.description == ""


def test_create_duplicate_category(session, make_category):
    make_category("Office")
    with pytest.raises(DuplicateNameError) as exc_info:
        category_service.create_category(session, CategoryCreate(name="Office"))
    assert exc_info.value.message == "A category with this name already exists"


def test_names_differing_in_case_are_distinct(session, make_category):
    make_category("Office")
    category = category_service.create_category(session, CategoryCreate(name="office"))
    assert category.name == "office"


def test_update_category(session, make_category):
    office = make_category("Office")
    updated = category_service.update_category(
        session, office.id, CategoryUpdate(name="Office supplies", description="Paper"),
    )
    assert updated.name == "Office supplies"
    assert updated.description == "Paper"


def test_update_category_conflicting_name(session, make_category):
    make_category("Office")
    tools = make_category("Tools")
    with pytest.raises(DuplicateNameError):
        category_service.update_category(session, tools.id, CategoryUpdate(name="Office"))


def test_missing_category(session):
    with pytest.raises(NotFoundError) as exc_info:
        category_service.get_category(session, 3)
    assert exc_info.value.message == "Category not found"

    with pytest.raises(NotFoundError):
        category_service.update_category(session, 3, CategoryUpdate(name="X"))
    with pytest.raises(NotFoundError):
        category_service.delete_category(session, 3)


def test_delete_category_in_use(session, make_category, make_product):
    office = make_category("Office")
    make_product("Stapler", [office.id])

    with pytest.raises(CategoryInUseError) as exc_info:
        category_service.delete_category(session, office.id)
    assert exc_info.value.message == "Cannot delete category that is being used by products"
    assert category_service.get_category(session, office.id).name == "Office"
