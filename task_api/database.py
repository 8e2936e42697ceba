import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlmodel import Session, SQLModel, create_engine

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task  # noqa: F401

logger = logging.getLogger(__name__)


def _create_engine():
    if DATABASE_URL.startswith("sqlite"):
        return create_engine(
            DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        DATABASE_URL,
        echo=False,
        pool_pre_ping=True,
    )

engine = _create_engine()

SessionLocal = sessionmaker(class_=Session, autocommit=False, autoflush=False, bind=engine)

def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def check_connection(bind=None) -> bool:
    """Run a trivial query against the database and report whether it worked."""
    bind = bind if bind is not None else engine
    try:
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Unable to connect to the database")
        return False
    logger.info("Database connection established")
    return True

def create_tables(bind=None):
    """Create all database tables."""
    SQLModel.metadata.create_all(bind=bind if bind is not None else engine)
    logger.info("Models synchronized with database")
