import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from .config import settings

logger = logging.getLogger(__name__)

_is_sqlite = settings.resolved_database_url.startswith("sqlite")

# check_same_thread=False: FastAPI runs sync handlers in a threadpool
engine = create_engine(
    settings.resolved_database_url,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create tables and make sure every weekday has a template row."""
    from .models import Base
    from .services.schedule_store import ScheduleStore

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        created = ScheduleStore(db).ensure_default_template()
    finally:
        db.close()
    if created:
        logger.info(f"Database initialised ({created} default weekday rows)")
