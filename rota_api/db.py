"""SQLite engine and session factory for Rota API."""
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rota_api.config import settings


def sqlite_url(db_path: str) -> str:
    """DB_PATH to a SQLAlchemy URL; the parent folder of a file DB is created."""
    if db_path == ":memory:":
        return "sqlite://"
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path.as_posix()}"


db_url = sqlite_url(settings.DB_PATH)

# :memory: lives per connection, so every session has to reuse the same one
engine = create_engine(
    db_url,
    connect_args={"check_same_thread": False},
    **({"poolclass": StaticPool} if settings.DB_PATH == ":memory:" else {}),
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_db() -> None:
    """Create missing tables."""
    from rota_api.models import Base

    Base.metadata.create_all(bind=engine)
