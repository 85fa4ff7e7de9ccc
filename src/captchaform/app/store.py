"""Append-only persistence of accepted submissions."""

from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from .models import Submission
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SubmissionRecord:
    name: str
    email: str


class RecordStoreError(Exception):
    def __init__(self, message, original_exception=None):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class SqlAlchemyRecordStore:
    """Insert ``SubmissionRecord`` rows through a SQLAlchemy session.

    There is no update or delete: every ``append`` is one new row, and
    duplicate name/email pairs are stored as-is.
    """

    def __init__(self, session):
        self.session = session

    def append(self, record: SubmissionRecord) -> int:
        row = Submission(name=record.name, email=record.email)
        try:
            self.session.add(row)
            self.session.flush()
            record_id = row.id
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error("Failed to store submission: %s", e)
            raise RecordStoreError("Could not store submission", e) from e
        logger.info("Submission stored", extra={"record_id": record_id})
        return record_id

    def count(self) -> int:
        return self.session.query(Submission).count()
