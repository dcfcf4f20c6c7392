# app/core/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import get_settings
from app.core.logger import logger

settings = get_settings()

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db() -> None:
    """Create the key-value table if it does not exist yet."""
    # registers KeyValueEntry on Base
    import app.core.storage  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Storage ready at {engine.url.render_as_string(hide_password=True)}")
