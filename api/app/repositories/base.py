"""
Shared plumbing for repositories.
"""
from contextlib import contextmanager
from sqlmodel import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from app.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Wraps a database session; one repository instance per request."""

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def storage_errors(self, action: str):
        """
        Roll back and translate storage failures.

        IntegrityError is re-raised untouched so services can decide what a
        constraint violation means. Every other SQLAlchemyError becomes a
        PersistenceError.
        """
        try:
            yield
        except IntegrityError:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Storage failure while trying to {action}: {e}")
            raise PersistenceError(f"Storage failure while trying to {action}") from e

    def commit(self) -> None:
        with self.storage_errors("commit"):
            self.session.commit()
