"""
Data access for workshop in-charges and the workshops they manage
"""

import logging
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from workshop_mgmt.models import Manages, WorkshopIC
from workshop_mgmt.workshop_ic.schema import ManagesCreateRequest, WICCreateRequest, WICUpdateRequest
from workshop_mgmt.utils.search import LIKE_ESCAPE, substring_pattern
from workshop_mgmt.utils.store_ops import insert_row, write_keyed

# Configure logger
logger = logging.getLogger(__name__)


def wic_to_response(wic: WorkshopIC) -> dict:
    return {
        "WkICID": wic.id,
        "FName": wic.fname,
        "MName": wic.mname,
        "LName": wic.lname,
        "Rating": wic.rating,
        "AreaIC": wic.area_ic,
    }


def manages_to_response(link: Manages) -> dict:
    return {"WkshpID": link.wk_code, "ICID": link.ic_id}


# ============ Workshop In-Charge ============

def list_wics(db: Session) -> List[WorkshopIC]:
    return db.query(WorkshopIC).order_by(WorkshopIC.id).all()


def search_wics(db: Session, term: str) -> List[WorkshopIC]:
    """Case-insensitive substring match on first, middle or last name"""
    pattern = substring_pattern(term)
    return (
        db.query(WorkshopIC)
        .filter(
            or_(
                WorkshopIC.fname.ilike(pattern, escape=LIKE_ESCAPE),
                WorkshopIC.mname.ilike(pattern, escape=LIKE_ESCAPE),
                WorkshopIC.lname.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(WorkshopIC.id)
        .all()
    )


def list_wics_by_area_ic(db: Session, area_ic_id: int) -> List[WorkshopIC]:
    return (
        db.query(WorkshopIC)
        .filter(WorkshopIC.area_ic == area_ic_id)
        .order_by(WorkshopIC.id)
        .all()
    )


def add_wic(db: Session, data: WICCreateRequest) -> int:
    wic = WorkshopIC(
        id=data.WkICID,
        fname=data.FName,
        mname=data.MName,
        lname=data.LName,
        rating=data.Rating,
        area_ic=data.AreaIC,
    )
    return insert_row(
        db, wic, "addWIC",
        unique_message=f"WIC with ID {data.WkICID} already exists.",
        foreign_key_message=f"Area IC ID {data.AreaIC} does not exist. Cannot assign WIC.",
    )


def update_wic(db: Session, wic_id: int, data: WICUpdateRequest) -> int:
    return write_keyed(
        db,
        db.query(WorkshopIC).filter(WorkshopIC.id == wic_id),
        "updateWIC",
        not_found_message=f"WIC ID {wic_id} not found.",
        values={
            WorkshopIC.fname: data.FName,
            WorkshopIC.mname: data.MName,
            WorkshopIC.lname: data.LName,
            WorkshopIC.rating: data.Rating,
            WorkshopIC.area_ic: data.AreaIC,
        },
        foreign_key_message=f"Area IC ID {data.AreaIC} does not exist. Cannot update WIC.",
    )


def delete_wic(db: Session, wic_id: int) -> int:
    return write_keyed(
        db,
        db.query(WorkshopIC).filter(WorkshopIC.id == wic_id),
        "deleteWIC",
        not_found_message=f"WIC ID {wic_id} not found.",
        foreign_key_message=(
            f"Cannot delete WIC ID {wic_id} because they still manage one or more workshops. "
            "Remove those management entries first."
        ),
    )


# ============ Manages ============

def list_manages(db: Session) -> List[Manages]:
    return db.query(Manages).order_by(Manages.wk_code, Manages.ic_id).all()


def list_manages_by_workshop(db: Session, wk_code: int) -> List[Manages]:
    return db.query(Manages).filter(Manages.wk_code == wk_code).order_by(Manages.ic_id).all()


def list_manages_by_wic(db: Session, ic_id: int) -> List[Manages]:
    return db.query(Manages).filter(Manages.ic_id == ic_id).order_by(Manages.wk_code).all()


def add_manages(db: Session, data: ManagesCreateRequest) -> int:
    link = Manages(wk_code=data.WkshpID, ic_id=data.ICID)
    return insert_row(
        db, link, "addManagesEntry",
        unique_message="This Workshop IC already manages this Workshop.",
        foreign_key_message="Workshop ID or Workshop IC ID does not exist.",
    )


def delete_manages(db: Session, wk_code: int, ic_id: int) -> int:
    return write_keyed(
        db,
        db.query(Manages).filter(Manages.wk_code == wk_code, Manages.ic_id == ic_id),
        "deleteManagesEntry",
        not_found_message="Management relationship not found.",
    )
