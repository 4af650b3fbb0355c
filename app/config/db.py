from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from app.settings import settings as s
from app.utils.logging_config import logger


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Request handlers run in a threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_recycle": 3600, "pool_size": 20, "max_overflow": 20}


engine = create_engine(s.DATABASE_URL, echo=s.DEBUG, **_engine_options(s.DATABASE_URL))

SessionLocal: sessionmaker[Session] = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


def check_db_connection():
    try:
        with SessionLocal() as session:
            session.execute(text("SELECT 1"))
            logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Database connection error: {e}")
        raise
