import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from school_api.core.errors import StorageFailure

logger = logging.getLogger(__name__)


class Repository:
    """Owns a request-scoped session and maps driver errors to StorageFailure."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def storage_errors(self, action: str):
        try:
            yield
        except (SQLAlchemyError, OverflowError) as exc:
            self.db.rollback()
            logger.exception("Storage failure while trying to %s", action)
            raise StorageFailure(str(exc)) from exc
