"""Database engine and session configuration."""

from collections.abc import Generator
from typing import Any, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from npcsim.config import settings
from npcsim.db.models import Base


def connect_args_for(url: str) -> dict[str, Any]:
    """SQLite sessions are shared with FastAPI worker threads."""
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def build_engine(url: str, echo: bool = False) -> Engine:
    return create_engine(url, connect_args=connect_args_for(url), echo=echo)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the ``npcs`` table if it does not exist yet."""
    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a session for one request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
