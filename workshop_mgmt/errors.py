"""
Domain errors shared by every entity module, and the single place where
store-native constraint signals are translated into them.
"""

import logging
from typing import Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


# SQLSTATE codes reported by PostgreSQL drivers
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"

# Message prefixes reported by SQLite
SQLITE_UNIQUE_VIOLATION = "UNIQUE constraint failed"
SQLITE_FOREIGN_KEY_VIOLATION = "FOREIGN KEY constraint failed"

UNIQUE = "unique"
FOREIGN_KEY = "foreign_key"


class WorkshopDomainError(Exception):
    """Base class for errors the API layer maps to a status code"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WorkshopDomainError):
    """Missing or malformed input, detected before any store call"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(WorkshopDomainError):
    status_code = status.HTTP_404_NOT_FOUND


class UniqueViolation(WorkshopDomainError):
    status_code = status.HTTP_409_CONFLICT


class ForeignKeyViolation(WorkshopDomainError):
    status_code = status.HTTP_409_CONFLICT


class AffectedRowsAnomaly(WorkshopDomainError):
    """A keyed update/delete touched more than one row; the statement was rolled back"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def constraint_kind(exc: IntegrityError) -> Optional[str]:
    """
    Identify which constraint an IntegrityError violated.

    Returns UNIQUE, FOREIGN_KEY, or None when the error is some other
    integrity failure (NOT NULL, CHECK, ...).
    """
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == PG_UNIQUE_VIOLATION:
        return UNIQUE
    if code == PG_FOREIGN_KEY_VIOLATION:
        return FOREIGN_KEY

    text = str(orig) if orig is not None else str(exc)
    if SQLITE_UNIQUE_VIOLATION in text:
        return UNIQUE
    if SQLITE_FOREIGN_KEY_VIOLATION in text:
        return FOREIGN_KEY
    return None


def translate_integrity_error(
    exc: IntegrityError,
    unique_message: Optional[str] = None,
    foreign_key_message: Optional[str] = None,
) -> Exception:
    """
    Map a store IntegrityError to the matching domain error.

    Callers raise the returned exception. When the violated constraint has no
    message for this call site, the original error is returned unchanged so it
    propagates as an unknown store error.
    """
    kind = constraint_kind(exc)
    if kind == UNIQUE and unique_message:
        return UniqueViolation(unique_message)
    if kind == FOREIGN_KEY and foreign_key_message:
        return ForeignKeyViolation(foreign_key_message)
    return exc
