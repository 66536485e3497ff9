import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select, col

from inventory.core.errors import InventoryError, TransactionFailureError
from inventory.db.errors import translate_store_error
from inventory.schemas.common import SearchResult

logger = logging.getLogger(__name__)


class BaseRepository:
    """Общее для репозиториев: сессия, коммит с переводом ошибок, поиск по имени"""

    model: Type[SQLModel]
    entity: str

    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            error = translate_store_error(exc, self.entity)
            if error is None:
                logger.exception("Unclassified store error on %s write", self.entity)
                raise
            logger.error("Store rejected %s write: %s", self.entity, error.message)
            raise error from exc

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Несколько операций одной транзакцией: всё или ничего"""
        try:
            yield
            self.session.commit()
        except InventoryError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            error = translate_store_error(exc, self.entity)
            if error is None:
                logger.exception("%s transaction failed and was rolled back", self.entity.capitalize())
                raise TransactionFailureError() from exc
            logger.error("%s transaction rolled back: %s", self.entity.capitalize(), error.message)
            raise error from exc

    def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(self.model.name).where(self.model.name == name)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)

        # Сравниваем ещё и в Python: регистронезависимая collation не должна давать совпадений
        return any(found == name for found in self.session.exec(stmt).all())

    def search_by_name(self, term: str, limit: int = 10) -> List[SearchResult]:
        stmt = (
            select(self.model.id, self.model.name)
            .where(col(self.model.name).icontains(term, autoescape=True))
            .order_by(self.model.name)
            .limit(limit)
        )
        return [SearchResult(id=row[0], name=row[1]) for row in self.session.exec(stmt).all()]
