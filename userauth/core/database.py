from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from userauth.core.config import settings

# SQLite connections are bound to the creating thread unless told otherwise,
# and request handlers run in a thread pool
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create database engine - manages connection pool
# echo=True logs every statement, useful when debugging a single request
engine = create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, connect_args=connect_args)

# Create session factory - each request gets a new session
# autocommit=False: Changes require explicit commit (prevents accidental commits)
# autoflush=False: Don't auto-flush before queries
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all database models
Base = declarative_base()


def init_db():
    """Create the users table if it does not exist yet"""
    # Import models so they register on Base.metadata before create_all
    from userauth.models import user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    """
    Dependency for getting database session.

    This is a FastAPI dependency that provides a database session to route handlers.
    The session is automatically closed after the request completes (via finally block).
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always close session, even if request raises an exception
        db.close()
