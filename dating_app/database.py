"""
Database connection and session management for the Dating App Backend
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from dating_app.core.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Single shared connection so an in-memory database survives across threads
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
            "echo": False,
        }
    return {
        "pool_pre_ping": True,      # Test connections before using
        "pool_size": 10,            # Connection pool size
        "max_overflow": 20,         # Overflow connections allowed
        "echo": settings.DEBUG,     # Log SQL queries in debug mode
    }


# Create database engine with connection pooling
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Session factory for creating database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session in endpoints

    Usage in FastAPI endpoints:
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables"""
    # Import models so they are registered on Base.metadata
    import dating_app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_db_connection() -> bool:
    """Run a trivial query to confirm the database is reachable"""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return True
