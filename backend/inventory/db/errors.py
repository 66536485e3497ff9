"""
Единственная точка перевода ошибок БД в доменные ошибки.

Понимает ответы SQLite, MySQL (errno) и PostgreSQL (SQLSTATE).
Всё, что не распознано, возвращается как None: вызывающий код
должен пробросить исходное исключение дальше.
"""
import re
from typing import Optional

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from inventory.core.errors import (
    CategoryInUseError,
    ConstraintViolationError,
    DuplicateNameError,
    InvalidCategoryReferenceError,
    InventoryError,
)

# MySQL errno / PostgreSQL SQLSTATE
DUPLICATE_CODES = {1062, "23505"}
FOREIGN_KEY_CODES = {1451, 1452, "23503"}
NOT_NULL_CODES = {1048, 1364, "23502"}
TOO_LONG_CODES = {1406, "22001"}
CHECK_CODES = {3819, "23514"}

CHECK_MESSAGES = {
    "ck_products_name_length": "Product name must be between 1 and 255 characters",
    "ck_products_description_length": "Description must not exceed 1000 characters",
    "ck_products_quantity_non_negative": "Quantity must be at least 0",
    "ck_categories_name_length": "Category name must be between 1 and 100 characters",
    "ck_categories_description_length": "Description must not exceed 500 characters",
}

_CHECK_NAME_RE = re.compile(r"(ck_[a-z_]+)")


def _native_code(exc: SQLAlchemyError):
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None

    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code:
        return code

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def _check_violation(message: str) -> ConstraintViolationError:
    match = _CHECK_NAME_RE.search(message)
    if match and match.group(1) in CHECK_MESSAGES:
        return ConstraintViolationError(CHECK_MESSAGES[match.group(1)])
    if match:
        return ConstraintViolationError(f"Constraint violation: {match.group(1)}")
    return ConstraintViolationError()


def translate_store_error(exc: SQLAlchemyError, entity: str) -> Optional[InventoryError]:
    """Классифицировать ошибку БД для сущности entity ("product" / "category")"""
    if not isinstance(exc, (IntegrityError, DataError)):
        return None

    code = _native_code(exc)
    message = str(getattr(exc, "orig", exc))
    lowered = message.lower()

    if code in DUPLICATE_CODES or "unique constraint" in lowered or "duplicate" in lowered:
        if "name" in lowered:
            return DuplicateNameError.for_entity(entity)
        return ConstraintViolationError("Duplicate entry detected")

    if code in FOREIGN_KEY_CODES or "foreign key constraint" in lowered:
        if entity == "product":
            return InvalidCategoryReferenceError(message="Referenced record does not exist")
        # у категории FK только входящие: это ссылка из product_categories при удалении
        if entity == "category":
            return CategoryInUseError()
        return ConstraintViolationError("Referenced record does not exist or is still in use")

    if code in NOT_NULL_CODES or "not null constraint" in lowered or "cannot be null" in lowered:
        return ConstraintViolationError("Required field cannot be null")

    if code in TOO_LONG_CODES or "too long" in lowered:
        return ConstraintViolationError("Data too long for field")

    if code in CHECK_CODES or "check constraint" in lowered:
        return _check_violation(message)

    return None
