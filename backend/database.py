from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base
import logging

from config.settings import DATABASE_URL, SQL_ECHO
from exceptions import StorageError

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Connection options for the configured backend."""
    if url.startswith('sqlite'):
        return {'connect_args': {'check_same_thread': False}}
    return {
        'pool_size': 20,
        'max_overflow': 30,
        'pool_pre_ping': True,  # Verify connections are alive before using
        'pool_recycle': 3600,
    }


engine = create_engine(DATABASE_URL, echo=SQL_ECHO, **_engine_options(DATABASE_URL))


def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if engine.dialect.name == 'sqlite':
    event.listen(engine, "connect", set_sqlite_pragma)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


@contextmanager
def unit_of_work(db: Session):
    """
    Run a block of reads and writes as one transaction.

    Commits when the block exits normally. Any exception rolls back every
    write made in the block; SQLAlchemy errors (including a failed commit)
    are re-raised as StorageError, everything else propagates unchanged.

    Example:
        with unit_of_work(db):
            item.remove_stock(3)
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Transaction rolled back: {e}")
        raise StorageError("commit", str(e)) from e
    except Exception:
        db.rollback()
        raise
