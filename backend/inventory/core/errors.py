"""
Доменные ошибки инвентаря.

Репозитории и сервисы бросают только наследников InventoryError;
HTTP-слой превращает их в ответ по ErrorKind.status_code.
"""
from enum import Enum
from typing import Iterable, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    DUPLICATE_NAME = "duplicate_name"
    CATEGORY_IN_USE = "category_in_use"
    INVALID_CATEGORY_REFERENCE = "invalid_category_reference"
    CONSTRAINT_VIOLATION = "constraint_violation"
    TRANSACTION_FAILURE = "transaction_failure"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_NAME: 400,
    ErrorKind.CATEGORY_IN_USE: 400,
    ErrorKind.INVALID_CATEGORY_REFERENCE: 400,
    ErrorKind.CONSTRAINT_VIOLATION: 400,
    ErrorKind.TRANSACTION_FAILURE: 500,
}


class InventoryError(Exception):
    kind: ErrorKind = ErrorKind.CONSTRAINT_VIOLATION
    default_message = "Inventory operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class NotFoundError(InventoryError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"

    @classmethod
    def for_entity(cls, entity: str) -> "NotFoundError":
        return cls(f"{entity.capitalize()} not found")


class DuplicateNameError(InventoryError):
    kind = ErrorKind.DUPLICATE_NAME
    default_message = "Duplicate entry detected"

    @classmethod
    def for_entity(cls, entity: str) -> "DuplicateNameError":
        return cls(f"A {entity} with this name already exists")


class CategoryInUseError(InventoryError):
    kind = ErrorKind.CATEGORY_IN_USE
    default_message = "Cannot delete category that is being used by products"

    def __init__(self, category_id: Optional[int] = None, usage_count: int = 0):
        self.category_id = category_id
        self.usage_count = usage_count
        super().__init__()


class InvalidCategoryReferenceError(InventoryError):
    kind = ErrorKind.INVALID_CATEGORY_REFERENCE
    default_message = "One or more category IDs are invalid"

    def __init__(self, missing_ids: Iterable[int] = (), message: Optional[str] = None):
        self.missing_ids = sorted(missing_ids)
        super().__init__(message)


class ConstraintViolationError(InventoryError):
    kind = ErrorKind.CONSTRAINT_VIOLATION
    default_message = "Constraint violation"


class TransactionFailureError(InventoryError):
    kind = ErrorKind.TRANSACTION_FAILURE
    default_message = "Transaction failed and was rolled back"
