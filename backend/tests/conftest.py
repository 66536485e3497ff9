"""
Фикстуры: свежая in-memory SQLite на каждый тест + TestClient с подменой get_db
"""
import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

import inventory.models  # noqa: F401
from inventory.db.session import create_db_engine, get_db
from inventory.main import app
from inventory.repositories import CategoryRepository, ProductRepository
from inventory.schemas.category import CategoryCreate
from inventory.schemas.product import ProductCreate


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite://", echo=False)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def category_repo(session):
    return CategoryRepository(session)


@pytest.fixture()
def product_repo(session):
    return ProductRepository(session)


@pytest.fixture()
def make_category(category_repo):
    def _make(name, description=""):
        return category_repo.create(CategoryCreate(name=name, description=description))
    return _make


@pytest.fixture()
def make_product(product_repo):
    def _make(name, category_ids, quantity=10, description=""):
        return product_repo.create(ProductCreate(
            name=name,
            description=description,
            quantity=quantity,
            category_ids=category_ids,
        ))
    return _make


@pytest.fixture()
def client(session):
    def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
