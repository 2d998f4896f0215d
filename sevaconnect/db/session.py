"""Database session management."""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sevaconnect.core.config import DatabaseSettings
from sevaconnect.core.logging import get_logger

logger = get_logger(__name__)


class Database:
    """
    Explicitly constructed store client.

    ``open()`` creates the engine and session factory, ``close()`` disposes
    the pool. Sessions are handed out per operation through :meth:`session`.
    """

    def __init__(self, settings: DatabaseSettings):
        self.settings = settings
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open; call open() first")
        return self._engine

    def open(self) -> "Database":
        if self._engine is not None:
            return self

        url = self.settings.DATABASE_URL
        if self.settings.is_sqlite:
            engine_kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                # One shared connection so every session sees the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {
                "pool_pre_ping": True,
                "pool_size": self.settings.DB_POOL_SIZE,
                "max_overflow": self.settings.DB_MAX_OVERFLOW,
                "pool_timeout": self.settings.DB_POOL_TIMEOUT,
                "pool_recycle": self.settings.DB_POOL_RECYCLE,
            }

        self._engine = create_engine(url, echo=self.settings.DB_ECHO, **engine_kwargs)
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(f"Database engine opened ({self._engine.dialect.name})")
        return self

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Yield a session that is always closed, rolling back anything left
        uncommitted when the block raises.
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not open; call open() first")

        db = self._session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
