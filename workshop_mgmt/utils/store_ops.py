"""
Single-statement write helpers used by every services module.

Each helper issues exactly one INSERT, UPDATE or DELETE, enforces the
affected-row contract and commits. Constraint violations come back as domain
errors via workshop_mgmt.errors.translate_integrity_error; every other store
error is rolled back and re-raised unchanged.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from workshop_mgmt.errors import AffectedRowsAnomaly, NotFound, translate_integrity_error

logger = logging.getLogger(__name__)


def _reraise_integrity(
    db: Session,
    exc: IntegrityError,
    unique_message: Optional[str],
    foreign_key_message: Optional[str],
    label: str,
):
    db.rollback()
    translated = translate_integrity_error(exc, unique_message, foreign_key_message)
    if translated is exc:
        logger.error(f"Unrecognised integrity error in {label}", extra={"error": str(exc)})
        raise exc
    logger.info(f"{label} rejected: {translated}")
    raise translated from exc


def insert_row(
    db: Session,
    row: Any,
    label: str,
    unique_message: Optional[str] = None,
    foreign_key_message: Optional[str] = None,
) -> int:
    """Insert one ORM row and commit; returns the affected-row count (1)"""
    try:
        db.add(row)
        db.commit()
    except IntegrityError as exc:
        _reraise_integrity(db, exc, unique_message, foreign_key_message, label)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Error in {label}", extra={"error": str(exc)})
        raise
    return 1


def write_keyed(
    db: Session,
    query: Query,
    label: str,
    not_found_message: str,
    values: Optional[Dict[Any, Any]] = None,
    unique_message: Optional[str] = None,
    foreign_key_message: Optional[str] = None,
) -> int:
    """
    Run a keyed UPDATE (when values is given) or DELETE over query.

    0 rows raises NotFound. More than one row is an anomaly: the statement is
    rolled back and AffectedRowsAnomaly raised, so the caller never commits a
    wider change than the key implies.
    """
    try:
        if values is None:
            count = query.delete(synchronize_session=False)
        else:
            count = query.update(values, synchronize_session=False)

        if count == 0:
            db.rollback()
            raise NotFound(not_found_message)
        if count > 1:
            db.rollback()
            logger.error(f"{label} anomaly: {count} rows affected, rolled back")
            raise AffectedRowsAnomaly(
                f"{label} anomaly detected: {count} rows would have been affected; no changes were saved."
            )
        db.commit()
    except IntegrityError as exc:
        _reraise_integrity(db, exc, unique_message, foreign_key_message, label)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Error in {label}", extra={"error": str(exc)})
        raise
    return count
