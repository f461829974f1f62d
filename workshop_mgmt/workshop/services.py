"""
Data access for workshops and their quarterly revenue.

score and profit are never written here; the store's triggers maintain them
and they are only read back.
"""

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from workshop_mgmt.models import Revenue, Workshop
from workshop_mgmt.workshop.schema import (
    RevenueCreateRequest,
    RevenueUpdateRequest,
    WorkshopCreateRequest,
    WorkshopUpdateRequest,
)
from workshop_mgmt.utils.search import LIKE_ESCAPE, substring_pattern
from workshop_mgmt.utils.store_ops import insert_row, write_keyed

# Configure logger
logger = logging.getLogger(__name__)


def normalize_area_name(name: str) -> str:
    """Trim and title-case an area name the way workshops store it: ' north zone' -> 'North Zone'"""
    words = name.strip().lower().split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


def workshop_to_response(workshop: Workshop) -> dict:
    return {
        "wk_code": workshop.wk_code,
        "wk_name": workshop.wk_name,
        "area": workshop.area,
        "manpower": workshop.manpower,
        "customer_visits": workshop.customer_visits,
        "recovery": workshop.recovery,
        "score": workshop.score,
    }


def revenue_to_response(revenue: Revenue) -> dict:
    return {
        "wkcode": revenue.wk_code,
        "year": revenue.year,
        "quarter": revenue.quarter,
        "total_sales": revenue.total_sales,
        "service_cost": revenue.service_cost,
        "profit": revenue.profit,
    }


# ============ Workshop ============

def list_workshops(db: Session) -> List[Workshop]:
    return db.query(Workshop).order_by(Workshop.wk_code).all()


def search_workshops(db: Session, term: str) -> List[Workshop]:
    pattern = substring_pattern(term)
    return (
        db.query(Workshop)
        .filter(Workshop.wk_name.ilike(pattern, escape=LIKE_ESCAPE))
        .order_by(Workshop.wk_code)
        .all()
    )


def list_workshops_by_area(db: Session, area_name: str) -> List[Workshop]:
    return (
        db.query(Workshop)
        .filter(func.lower(Workshop.area) == func.lower(area_name.strip()))
        .order_by(Workshop.wk_code)
        .all()
    )


def add_workshop(db: Session, data: WorkshopCreateRequest) -> int:
    area = normalize_area_name(data.area)
    workshop = Workshop(
        wk_code=data.wk_code,
        wk_name=data.wk_name,
        area=area,
        manpower=data.manpower,
        customer_visits=data.customer_visits,
        recovery=data.recovery,
    )
    return insert_row(
        db, workshop, "addWorkshop",
        unique_message=f"Workshop with code {data.wk_code} already exists.",
        foreign_key_message=f"Area '{area}' does not exist. Cannot assign workshop.",
    )


def update_workshop(db: Session, wk_code: int, data: WorkshopUpdateRequest) -> int:
    area = normalize_area_name(data.area)
    return write_keyed(
        db,
        db.query(Workshop).filter(Workshop.wk_code == wk_code),
        "updateWorkshop",
        not_found_message=f"Workshop code {wk_code} not found.",
        values={
            Workshop.wk_name: data.wk_name,
            Workshop.area: area,
            Workshop.manpower: data.manpower,
            Workshop.customer_visits: data.customer_visits,
            Workshop.recovery: data.recovery,
        },
        foreign_key_message=f"Area '{area}' does not exist. Cannot assign workshop.",
    )


def delete_workshop(db: Session, wk_code: int) -> int:
    """Delete a workshop; the store cascades to its revenue and manages rows"""
    return write_keyed(
        db,
        db.query(Workshop).filter(Workshop.wk_code == wk_code),
        "deleteWorkshop",
        not_found_message=f"Workshop code {wk_code} not found.",
    )


# ============ Revenue ============

def list_revenue(db: Session) -> List[Revenue]:
    return (
        db.query(Revenue)
        .order_by(Revenue.year.desc(), Revenue.quarter.desc(), Revenue.wk_code)
        .all()
    )


def list_revenue_by_workshop(db: Session, wk_code: int) -> List[Revenue]:
    return (
        db.query(Revenue)
        .filter(Revenue.wk_code == wk_code)
        .order_by(Revenue.year.desc(), Revenue.quarter.desc())
        .all()
    )


def add_revenue(db: Session, data: RevenueCreateRequest) -> int:
    revenue = Revenue(
        wk_code=data.wkcode,
        year=data.year,
        quarter=data.quarter,
        total_sales=data.total_sales,
        service_cost=data.service_cost,
    )
    return insert_row(
        db, revenue, "addRevenue",
        unique_message=(
            f"Revenue entry already exists for Workshop {data.wkcode}, "
            f"Year {data.year}, Quarter {data.quarter}."
        ),
        foreign_key_message=f"Workshop code {data.wkcode} does not exist.",
    )


def _revenue_key(db: Session, wk_code: int, year: int, quarter: int):
    return db.query(Revenue).filter(
        Revenue.wk_code == wk_code,
        Revenue.year == year,
        Revenue.quarter == quarter,
    )


def update_revenue(db: Session, wk_code: int, year: int, quarter: int, data: RevenueUpdateRequest) -> int:
    return write_keyed(
        db,
        _revenue_key(db, wk_code, year, quarter),
        "updateRevenue",
        not_found_message="Revenue entry not found or no changes were made.",
        values={
            Revenue.total_sales: data.total_sales,
            Revenue.service_cost: data.service_cost,
        },
    )


def delete_revenue(db: Session, wk_code: int, year: int, quarter: int) -> int:
    return write_keyed(
        db,
        _revenue_key(db, wk_code, year, quarter),
        "deleteRevenue",
        not_found_message="Revenue entry not found.",
    )
