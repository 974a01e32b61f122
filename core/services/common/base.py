import logging

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ServiceBase:
    """Owns the unit-of-work session shared by a service and its repositories."""

    def __init__(self, session: Session):
        self._session = session

    def commit(self):
        try:
            self._session.commit()
        except Exception:
            logger.debug("Commit failed; rolling back", exc_info=True)
            self._session.rollback()
            raise

    def rollback(self):
        self._session.rollback()
