"""Database infrastructure: engine, schema bootstrap and sessions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Tuple

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

# Bump whenever the habits table changes shape. A mismatch with the version
# recorded in the store drops and recreates every table.
SCHEMA_VERSION = 2

logger = get_logger(__name__)


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    engine_options = config.sqlalchemy_engine_options()
    return create_engine(config.DATABASE_URL, **engine_options)


def init_database(engine: Engine, schema_version: int = SCHEMA_VERSION) -> bool:
    """Initialize the schema, rebuilding it when the stored version differs.

    The store keeps its schema version in SQLite's ``user_version`` pragma.
    There are no incremental migrations: a different version discards every
    row and recreates the tables.

    Returns:
        True when the tables were (re)created from scratch
    """
    from ..models import Habit  # registers tables on SQLModel.metadata

    if engine.dialect.name != "sqlite":
        SQLModel.metadata.create_all(engine)
        return False

    with engine.begin() as connection:
        stored_version = connection.exec_driver_sql("PRAGMA user_version").scalar() or 0
        if stored_version == schema_version:
            SQLModel.metadata.create_all(connection)
            return False

        if stored_version or inspect(connection).has_table(Habit.__tablename__):
            logger.warning(
                "Schema version changed, discarding stored habits",
                extra={"stored_version": stored_version, "schema_version": schema_version},
            )
        SQLModel.metadata.drop_all(connection)
        SQLModel.metadata.create_all(connection)
        connection.exec_driver_sql(f"PRAGMA user_version = {int(schema_version)}")

    logger.info("Database schema created", extra={"schema_version": schema_version})
    return True


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Provide a transactional scope around operations."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_session_factory(engine: Engine) -> Callable[[], ContextManager[Session]]:
    """Create a session factory bound to ``engine``."""

    def factory() -> ContextManager[Session]:
        return session_scope(engine)

    return factory


def bootstrap_database(
    config: BaseConfig | None = None,
) -> Tuple[Engine, Callable[[], ContextManager[Session]], bool]:
    """Build engine + session factory and make sure the schema is current.

    Returns (engine, session_factory, rebuilt) where ``rebuilt`` is the
    result of :func:`init_database`.
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    rebuilt = init_database(engine)
    return engine, create_session_factory(engine), rebuilt
