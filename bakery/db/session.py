import logging
import threading
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from bakery.core.exceptions import BackendUnavailableError
from bakery.storage import ObjectStorage, create_storage

logger = logging.getLogger(__name__)

Base = declarative_base()


class Backend:
    """
    Database engine, session factory and object storage for one application.

    Constructed explicitly from settings and passed to request handlers through
    the ``get_db`` / ``get_storage`` dependencies. Nothing connects until the
    first session or storage access; initialisation runs at most once.
    """

    def __init__(self, settings, engine: Optional[Engine] = None, storage: Optional[ObjectStorage] = None):
        self.settings = settings
        self._engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine else None
        self._storage = storage
        self._lock = threading.Lock()

    def _create_engine(self) -> Engine:
        database_url = self.settings.DATABASE_URL
        # Full Unicode support for MySQL/MariaDB
        if "mysql" in database_url.lower() and "charset" not in database_url.lower():
            separator = "&" if "?" in database_url else "?"
            database_url = f"{database_url}{separator}charset=utf8mb4"

        if database_url.startswith("sqlite"):
            return create_engine(database_url, connect_args={"check_same_thread": False})

        return create_engine(
            database_url,
            pool_size=10,
            max_overflow=10,
            pool_recycle=3600,
            pool_pre_ping=True,  # Test connections before use
            pool_timeout=30,
        )

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    try:
                        self._engine = self._create_engine()
                    except Exception as exc:
                        logger.error("Database initialisation failed: %s", exc)
                        raise BackendUnavailableError(f"Failed to initialise database: {exc}") from exc
        return self._engine

    @property
    def storage(self) -> ObjectStorage:
        if self._storage is None:
            with self._lock:
                if self._storage is None:
                    try:
                        self._storage = create_storage(self.settings)
                    except Exception as exc:
                        logger.error("Object storage initialisation failed: %s", exc)
                        raise BackendUnavailableError(f"Failed to initialise object storage: {exc}") from exc
        return self._storage

    def session(self) -> Session:
        if self._session_factory is None:
            self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        return self._session_factory()


# Dependencies for FastAPI
def get_db(request: Request):
    db = request.app.state.backend.session()
    try:
        yield db
    finally:
        db.close()


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.backend.storage
