import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.engine import make_url

from config import DATABASE_URL, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

_url = make_url(DATABASE_URL)
_is_sqlite = _url.get_backend_name() == "sqlite"

# SQLite connections are shared across FastAPI's worker threads
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    pool_pre_ping=not _is_sqlite,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a database session and closes it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create the users and journal_entries tables (and a SQLite file's folder)."""
    from pathlib import Path
    from models.user import User
    from models.journal import JournalEntry

    bind = bind or engine
    if _is_sqlite and _url.database and _url.database != ":memory:":
        Path(_url.database).parent.mkdir(parents=True, exist_ok=True)

    Base.metadata.create_all(bind=bind, tables=[User.__table__, JournalEntry.__table__])
    logger.info(f"Tables ready on {_url.render_as_string(hide_password=True)}")
