"""
Database configuration and session management

Engine and session factory are built from settings by the app factory and
kept on ``app.state``. Request handlers get a session through ``get_db``.
"""

from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool, StaticPool

# Base class for ORM models
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the format every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_db_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for a database URL.

    PostgreSQL and friends use NullPool for containerized deployments.
    SQLite gets a single shared connection so in-memory databases survive
    across sessions.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    return create_engine(
        database_url,
        poolclass=NullPool,
        echo=False,  # Set to True for SQL query logging during development
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables registered on Base."""
    # Models must be imported so their tables are registered
    import apps.accounts.models  # noqa: F401
    import apps.blog.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    """
    Dependency injection for database sessions
    Usage in FastAPI endpoints:

    @router.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # use db here
        pass
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connection(engine: Engine) -> bool:
    """
    Test database connectivity
    Returns True if connection successful, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
