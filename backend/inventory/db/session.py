"""
Движок БД и сессии.

Один пул соединений на процесс; каждый запрос получает свою Session,
а значит и одно соединение на всё время операции.
"""
import logging
from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from inventory.core.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite по умолчанию не проверяет внешние ключи"""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    url = database_url or settings.DATABASE_URL
    echo = settings.DEBUG if echo is None else echo

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
        enable_sqlite_foreign_keys(engine)
    else:
        engine = create_engine(
            url,
            echo=echo,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )

    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


engine = create_db_engine()


def create_tables(bind: Engine | None = None) -> None:
    """Создание всех таблиц"""
    import inventory.models  # noqa: F401  регистрирует таблицы в metadata

    SQLModel.metadata.create_all(bind or engine)


def get_db() -> Iterator[Session]:
    with Session(engine) as session:
        yield session
