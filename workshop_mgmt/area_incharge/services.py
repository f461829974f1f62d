"""
Data access for area in-charges and the areas they supervise
"""

import logging
from typing import List

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from workshop_mgmt.errors import NotFound
from workshop_mgmt.models import Area, AreaInCharge
from workshop_mgmt.area_incharge.schema import AICCreateRequest, AICUpdateRequest, AreaCreateRequest
from workshop_mgmt.utils.search import LIKE_ESCAPE, substring_pattern
from workshop_mgmt.utils.store_ops import insert_row, write_keyed

# Configure logger
logger = logging.getLogger(__name__)


def aic_to_response(aic: AreaInCharge) -> dict:
    return {
        "ID": aic.id,
        "FirstName": aic.first_name,
        "MiddleName": aic.middle_name,
        "LastName": aic.last_name,
    }


def area_to_response(area: Area) -> dict:
    return {
        "Area_Name": area.area_name,
        "AIC_ID": area.ic,
    }


# ============ Area In-Charge ============

def list_aics(db: Session) -> List[AreaInCharge]:
    return db.query(AreaInCharge).order_by(AreaInCharge.id).all()


def search_aics(db: Session, term: str) -> List[AreaInCharge]:
    """Case-insensitive substring match on first, middle or last name"""
    pattern = substring_pattern(term)
    return (
        db.query(AreaInCharge)
        .filter(
            or_(
                AreaInCharge.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                AreaInCharge.middle_name.ilike(pattern, escape=LIKE_ESCAPE),
                AreaInCharge.last_name.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(AreaInCharge.id)
        .all()
    )


def add_aic(db: Session, data: AICCreateRequest) -> int:
    aic = AreaInCharge(
        id=data.ID,
        first_name=data.FirstName,
        middle_name=data.MiddleName,
        last_name=data.LastName,
    )
    return insert_row(
        db, aic, "addAIC",
        unique_message=f"AIC with ID {data.ID} already exists.",
    )


def update_aic(db: Session, aic_id: int, data: AICUpdateRequest) -> int:
    return write_keyed(
        db,
        db.query(AreaInCharge).filter(AreaInCharge.id == aic_id),
        "updateAIC",
        not_found_message=f"Area In-Charge ID {aic_id} not found.",
        values={
            AreaInCharge.first_name: data.FirstName,
            AreaInCharge.middle_name: data.MiddleName,
            AreaInCharge.last_name: data.LastName,
        },
    )


def delete_aic(db: Session, aic_id: int) -> int:
    return write_keyed(
        db,
        db.query(AreaInCharge).filter(AreaInCharge.id == aic_id),
        "deleteAIC",
        not_found_message=f"Area In-Charge ID {aic_id} not found.",
        foreign_key_message=(
            f"Cannot delete AIC ID {aic_id} because they still manage one or more areas "
            "or workshop ICs. Please reassign or delete related records first."
        ),
    )


# ============ Area ============

def list_areas(db: Session) -> List[Area]:
    return db.query(Area).order_by(func.lower(Area.area_name)).all()


def list_areas_by_aic(db: Session, aic_id: int) -> List[Area]:
    return (
        db.query(Area)
        .filter(Area.ic == aic_id)
        .order_by(func.lower(Area.area_name))
        .all()
    )


def add_area(db: Session, data: AreaCreateRequest) -> int:
    area_name = data.Area_Name.strip()
    area = Area(area_name=area_name, ic=data.AIC_ID)
    return insert_row(
        db, area, "addArea",
        unique_message=f"Area '{area_name}' already exists.",
        foreign_key_message=f"Area IC ID {data.AIC_ID} does not exist. Cannot assign area.",
    )


def delete_area(db: Session, area_name: str) -> int:
    """
    Delete an area by name. An exact match wins; otherwise the name is matched
    without regard to case.
    """
    name = area_name.strip()
    foreign_key_message = f"Cannot delete area '{name}' because it is referenced by other records."
    try:
        return write_keyed(
            db,
            db.query(Area).filter(Area.area_name == name),
            "deleteArea",
            not_found_message=f"Area '{name}' not found.",
            foreign_key_message=foreign_key_message,
        )
    except NotFound:
        return write_keyed(
            db,
            db.query(Area).filter(func.lower(Area.area_name) == func.lower(name)),
            "deleteArea",
            not_found_message=f"Area '{name}' not found.",
            foreign_key_message=foreign_key_message,
        )
