import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from billing.config import settings
from billing.exceptions import ConcurrentUpdateError, LedgerError, StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE RESTRICT/CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_ledger_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine for the ledger store, enabling FK enforcement on SQLite."""
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args

    ledger_engine = create_engine(database_url, echo=settings.sql_echo, **kwargs)

    if is_sqlite:
        event.listen(ledger_engine, "connect", _enable_sqlite_foreign_keys)
    return ledger_engine


engine = create_ledger_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Run one logical ledger operation atomically.

    Commits on success. Any failure rolls back every write made inside the
    block; SQLAlchemy failures are re-raised as StorageError.
    """
    try:
        yield db
        db.commit()
    except LedgerError:
        db.rollback()
        raise
    except StaleDataError as e:
        db.rollback()
        logger.warning(f"Concurrent modification detected: {e}")
        raise ConcurrentUpdateError("Document was modified by another request, reload and retry") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage failure, transaction rolled back: {e}", exc_info=True)
        raise StorageError(f"Storage failure: {e.__class__.__name__}") from e
    except Exception:
        db.rollback()
        raise
