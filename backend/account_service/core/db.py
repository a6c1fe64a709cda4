import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_options(settings: Settings) -> dict:
    url = make_url(settings.DATABASE_URL)

    if settings.is_sqlite:
        connect_args = {
            "check_same_thread": False,
            "timeout": settings.DB_CONNECT_TIMEOUT,
        }
        db_path = url.database
        if not db_path or db_path == ":memory:":
            # one shared connection, otherwise every checkout sees an empty database
            logger.info("[DB CONFIG] Using in-memory SQLite")
            return {"poolclass": StaticPool, "connect_args": connect_args}

        # Local dev fallback (auto-create folder)
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
        logger.info("[DB CONFIG] Using SQLite → %s", db_path)
        return {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "connect_args": connect_args,
        }

    logger.info("[DB CONFIG] Using %s → %s", url.get_backend_name(), settings.safe_database_url)
    connect_args = {}
    if url.get_backend_name() == "postgresql":
        connect_args["connect_timeout"] = settings.DB_CONNECT_TIMEOUT
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": 3600,
        "connect_args": connect_args,
    }


class Database:
    """
    Owns the engine and its bounded connection pool.

    Built once by the application factory and handed to whoever needs the
    store; nothing reaches for it through module state.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = create_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,
            future=True,
            **_engine_options(settings),
        )
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Yield a session; commit on success, roll back on error, always close."""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def healthcheck(self) -> Tuple[bool, Optional[str]]:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True, None
        except Exception as e:
            return False, str(e)

    def create_all(self) -> None:
        from ..models import user  # noqa: F401  (registers the table)

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
