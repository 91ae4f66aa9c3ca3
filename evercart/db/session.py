from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool
from evercart.core.config import settings
import logging

logger = logging.getLogger(__name__)


def build_engine(url: str):
    if url.startswith("sqlite"):
        # SQLite connections are shared across the threadpool FastAPI runs sync routes in
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)

    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,              # Validate connections
        pool_recycle=3600,               # Recycle every hour
        echo=False,
    )


engine = build_engine(settings.DATABASE_URL)

@event.listens_for(engine, "connect")
def receive_connect(dbapi_connection, connection_record):
    logger.debug("Database connection established")

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()
