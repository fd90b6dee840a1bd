"""
Database session management.
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from courtside.core.config import settings
from courtside.db.base import Base

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Connection options per backend. SQLite connections are shared across threads by the test client."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 3600}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    **_engine_options(settings.DATABASE_URL)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Initialize database tables."""
    # Models must be imported so they are registered on Base.metadata
    import courtside.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")
