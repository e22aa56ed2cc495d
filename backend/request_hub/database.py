"""SQLAlchemy engine, session factory and the FastAPI ``get_db`` dependency."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from request_hub.config import settings
from request_hub.errors import BackendError

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

# Some hosts still hand out the legacy scheme
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield one session per request and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def backend_call(db: Session, action: str) -> Iterator[None]:
    """Roll back and surface any database failure as ``BackendError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Database failure while %s", action)
        raise BackendError(f"Backend error while {action}") from exc
