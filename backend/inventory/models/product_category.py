from sqlmodel import SQLModel, Field
from sqlalchemy import Column, ForeignKey, Integer


class ProductCategory(SQLModel, table=True):
    """Связь товар <-> категория (M2M)"""
    __tablename__ = "product_categories"

    product_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("products.id", ondelete="CASCADE"),
            primary_key=True,
        )
    )
    # Категорию с товарами удалить нельзя: RESTRICT на уровне БД
    category_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("categories.id", ondelete="RESTRICT"),
            primary_key=True,
            index=True,
        )
    )
