"""Database session management."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from vocabkeep.core.app_exceptions import AppError, InternalError

logger = logging.getLogger(__name__)

# Session factory, bound to an engine at application startup
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,  # Prevent lazy loading issues
)


def configure_session(engine: Engine) -> None:
    """Bind the session factory to an engine."""
    SessionLocal.configure(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session, operation: str) -> Iterator[Session]:
    """Run a block as one atomic unit of work.

    Commits when the block finishes, rolls back on any exception. Store
    failures are logged and re-raised as ``InternalError``; application
    errors pass through unchanged.
    """
    try:
        yield db
        db.commit()
    except AppError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            "Transaction failed",
            extra={"operation": operation, "error": str(e)},
            exc_info=True,
        )
        raise InternalError(f"{operation} failed") from e
    except BaseException:
        db.rollback()
        raise
