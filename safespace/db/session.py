# safespace/db/session.py
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from safespace.core.config import settings

logger = logging.getLogger(__name__)


def process_database_url(url: str) -> str:
    """Normalise hosted Postgres URLs (SSL required on the platform)."""
    if not url:
        logger.warning("DATABASE_URL not set; using SQLite")
        return "sqlite:///./safespace.db"

    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]

    if url.startswith("postgresql://") and "sslmode=" not in url:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}sslmode=require"

    return url


def build_engine(url: str) -> Engine:
    url = process_database_url(url)
    engine_kwargs = dict(pool_pre_ping=True)
    connect_args = {}

    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        if ":memory:" in url or url == "sqlite://":
            engine_kwargs["poolclass"] = StaticPool
    elif url.startswith("postgresql://"):
        engine_kwargs.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
        })

    return create_engine(url, connect_args=connect_args, echo=False, **engine_kwargs)


engine = build_engine(settings.DATABASE_URL)

# Rows are handed to controllers after commit, so keep their attributes loaded
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
