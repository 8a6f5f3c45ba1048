from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from devconnect.core.config import settings

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency for getting database session.

    Each request gets its own session, closed after the request completes.
    Uncommitted work is rolled back on close, so a failed request never
    leaves half of a read-modify-write behind.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables for every model registered on Base."""
    # Model modules must be imported so their tables are known to Base.metadata
    from devconnect.models import user, profile, post  # noqa: F401

    Base.metadata.create_all(bind=engine)
