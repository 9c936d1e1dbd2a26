import logging
import os
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy import insert as generic_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from core.config_loader import config_loader
from core.db.tables import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the SQLAlchemy engine and session factory.
    Connects lazily from DATABASE_URL or the config file unless init() was called.
    """

    def __init__(self):
        self.url: Optional[str] = None
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    def init(self, url: str, pool_size: int = 5) -> None:
        """Connect to `url` and create missing tables."""
        if self._engine is not None:
            self.dispose()

        if url.startswith("sqlite"):
            if url in ("sqlite://", "sqlite:///:memory:"):
                engine = create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
            else:
                db_path = url.split("sqlite:///", 1)[-1]
                os.makedirs(Path(db_path).parent, exist_ok=True)
                engine = create_engine(url, connect_args={"check_same_thread": False})
        else:
            engine = create_engine(
                url,
                poolclass=QueuePool,
                pool_size=pool_size,
                max_overflow=pool_size * 2,
                pool_pre_ping=True,
                isolation_level="READ COMMITTED",
            )

        Base.metadata.create_all(engine)
        self.url = url
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        logger.info(f"Connected to {engine.url.render_as_string(hide_password=True)}")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self.init(os.getenv("DATABASE_URL") or config_loader.get_database_url(), config_loader.get_pool_size())
        return self._engine

    def session(self) -> Session:
        if self._session_factory is None:
            self.engine
        return self._session_factory()

    def insert(self, table):
        """INSERT statement for the active dialect, supporting on_conflict_do_nothing where possible."""
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            return postgresql_insert(table)
        if dialect == "sqlite":
            return sqlite_insert(table)
        return generic_insert(table)

    def reset(self) -> None:
        """Drop and recreate all tables."""
        Base.metadata.drop_all(self.engine)
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self.url = None


# Global instance
database = Database()
