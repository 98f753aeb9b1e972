from contextlib import contextmanager
import time

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.services.customizer.exceptions import TemplateUnavailableError

SLOW_TRANSACTION_SECONDS = 5


@contextmanager
def db_transaction(db: Session):
    """
    Context manager to wrap database writes in a transaction.
    Commits on success; rolls back on exception.

    Args:
        db: Database session
    """
    start_time = time.time()
    try:
        yield

        duration = time.time() - start_time
        if duration > SLOW_TRANSACTION_SECONDS:
            logger.warning(
                f"Slow database transaction completed in {duration:.2f} seconds"
            )

        db.commit()
    except Exception as e:
        db.rollback()
        duration = time.time() - start_time
        logger.exception(
            f"Database transaction failed after {duration:.2f} seconds: {str(e)}"
        )
        raise


@contextmanager
def read_db_transaction(db: Session, **kwargs):
    """
    Context manager to wrap database reads of template data.

    Storage failures surface as TemplateUnavailableError; they are not retried.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception(
            f"Read database transaction failed with kwargs: {kwargs}: {str(e)}"
        )
        raise TemplateUnavailableError() from e
