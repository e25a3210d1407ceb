from typing import Iterator
from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from app.core.config import Settings

# Create Base class for models
Base = declarative_base()


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one application instance.

    Built explicitly and handed to the app factory (or created from settings
    at startup), so nothing holds a module-level connection pool.
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            pool_pre_ping=True,  # Verify connections before using them
            pool_size=10,
            max_overflow=20
        )

    def create_tables(self) -> None:
        """Create the applications table if it does not exist yet."""
        from app.models import application  # noqa: F401  Import models to register them
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def close(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
