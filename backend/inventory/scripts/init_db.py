"""
Создание таблиц и (по желанию) демо-данные
Запуск: python -m inventory.scripts.init_db [--seed]
"""
import sys

from sqlmodel import Session

from inventory.core.errors import DuplicateNameError
from inventory.db.session import engine, create_tables
from inventory.schemas.category import CategoryCreate
from inventory.schemas.product import ProductCreate
from inventory.services.categories import create_category
from inventory.services.products import create_product

DEMO_CATEGORIES = [
    ("Electronics", "Devices and accessories"),
    ("Office", "Office supplies"),
    ("Tools", "Hand and power tools"),
]

DEMO_PRODUCTS = [
    ("USB-C Cable", "1m braided cable", 120, ["Electronics"]),
    ("Desk Lamp", "LED lamp with dimmer", 8, ["Electronics", "Office"]),
    ("Stapler", "", 35, ["Office"]),
    ("Screwdriver Set", "12 pieces", 4, ["Tools"]),
]


def seed_demo_data():
    """Демо-категории и товары; существующие имена пропускаются"""
    with Session(engine) as session:
        ids = {}
        for name, description in DEMO_CATEGORIES:
            try:
                ids[name] = create_category(session, CategoryCreate(name=name, description=description)).id
            except DuplicateNameError:
                print(f"Category already exists: {name}")

        for name, description, quantity, categories in DEMO_PRODUCTS:
            category_ids = [ids[c] for c in categories if c in ids]
            if not category_ids:
                continue
            try:
                create_product(session, ProductCreate(
                    name=name,
                    description=description,
                    quantity=quantity,
                    category_ids=category_ids,
                ))
            except DuplicateNameError:
                print(f"Product already exists: {name}")


def main():
    print("Creating tables...")
    create_tables()
    if "--seed" in sys.argv[1:]:
        print("Seeding demo data...")
        seed_demo_data()
    print("Done!")


if __name__ == "__main__":
    main()
