import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from workshop_mgmt.database import get_db
from workshop_mgmt.errors import WorkshopDomainError
from workshop_mgmt.workshop import services
from workshop_mgmt.workshop.schema import (
    RevenueCreateRequest,
    RevenueResponse,
    RevenueUpdateRequest,
    WorkshopCreateRequest,
    WorkshopResponse,
    WorkshopUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
prefix="/api/workshops",
tags=["Workshop"]
)

# Registration order matters: every /search, /area and /revenue route must be
# declared before the generic /{wk_code} routes that share their prefix.


def _failed(route: str, detail: str) -> HTTPException:
    logger.exception(f"Route error in {route}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get("/search", response_model=List[WorkshopResponse], summary="Search workshops by name")
def search_workshops(
    term: Optional[str] = Query(None, description="Workshop name fragment"),
    db: Session = Depends(get_db)
):
    try:
        return [services.workshop_to_response(w) for w in services.search_workshops(db, term)]
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("GET /api/workshops/search", f"Failed to search workshops for term: {term}")


@router.get(
    "/area/{area_name:path}",
    response_model=List[WorkshopResponse],
    summary="Workshops in an area",
    description="Area name is matched without regard to case."
)
def get_workshops_by_area(area_name: str, db: Session = Depends(get_db)):
    try:
        return [services.workshop_to_response(w) for w in services.list_workshops_by_area(db, area_name)]
    except Exception:
        raise _failed(f"GET /api/workshops/area/{area_name}", f"Failed to fetch workshops for area: {area_name}")


# --- REVENUE ROUTES ---

@router.get("/revenue", response_model=List[RevenueResponse], summary="List revenue")
def get_revenue(db: Session = Depends(get_db)):
    try:
        return [services.revenue_to_response(r) for r in services.list_revenue(db)]
    except Exception:
        raise _failed("GET /api/workshops/revenue", "Failed to fetch all revenue records.")


@router.post(
    "/revenue",
    status_code=status.HTTP_201_CREATED,
    summary="Create revenue entry",
    description="Profit is calculated by the store."
)
def add_revenue(data: RevenueCreateRequest, db: Session = Depends(get_db)):
    try:
        services.add_revenue(db, data)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("POST /api/workshops/revenue", "Failed to add revenue entry.")
    return {
        "message": "Revenue entry added successfully (profit calculated).",
        "wkcode": data.wkcode,
        "year": data.year,
        "quarter": data.quarter,
    }


@router.put(
    "/revenue/{wk_code}/{year}/{quarter}",
    summary="Update revenue entry",
    description="Profit is recalculated by the store."
)
def edit_revenue(
    wk_code: int,
    year: int,
    quarter: int,
    data: RevenueUpdateRequest,
    db: Session = Depends(get_db)
):
    try:
        count = services.update_revenue(db, wk_code, year, quarter, data)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("PUT /api/workshops/revenue", "Failed to update revenue entry.")
    return {"message": "Revenue entry updated successfully (profit recalculated).", "affected_rows": count}


@router.delete("/revenue/{wk_code}/{year}/{quarter}", summary="Delete revenue entry")
def remove_revenue(wk_code: int, year: int, quarter: int, db: Session = Depends(get_db)):
    try:
        count = services.delete_revenue(db, wk_code, year, quarter)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("DELETE /api/workshops/revenue", "Failed to delete revenue entry.")
    return {"message": "Revenue entry deleted successfully.", "affected_rows": count}


@router.get("/{wk_code}/revenue", response_model=List[RevenueResponse], summary="Revenue history of a workshop")
def get_revenue_by_workshop(wk_code: int, db: Session = Depends(get_db)):
    try:
        return [services.revenue_to_response(r) for r in services.list_revenue_by_workshop(db, wk_code)]
    except Exception:
        raise _failed(
            f"GET /api/workshops/{wk_code}/revenue",
            f"Failed to fetch revenues for workshop code {wk_code}."
        )


# --- WORKSHOP ROUTES ---

@router.get("", response_model=List[WorkshopResponse], summary="List workshops")
def get_workshops(db: Session = Depends(get_db)):
    try:
        return [services.workshop_to_response(w) for w in services.list_workshops(db)]
    except Exception:
        raise _failed("GET /api/workshops", "Failed to fetch all workshops.")


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create workshop",
    description="Score is calculated by the store."
)
def add_workshop(data: WorkshopCreateRequest, db: Session = Depends(get_db)):
    try:
        services.add_workshop(db, data)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("POST /api/workshops", "Failed to add workshop.")
    return {"message": "Workshop added successfully (score calculated).", "wk_code": data.wk_code}


@router.put("/{wk_code}", summary="Update workshop", description="Score is recalculated by the store.")
def edit_workshop(wk_code: int, data: WorkshopUpdateRequest, db: Session = Depends(get_db)):
    try:
        count = services.update_workshop(db, wk_code, data)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed(f"PUT /api/workshops/{wk_code}", f"Failed to update workshop code {wk_code}.")
    return {"message": f"Workshop code {wk_code} updated successfully (score recalculated).", "affected_rows": count}


@router.delete(
    "/{wk_code}",
    summary="Delete workshop",
    description="Revenue and management entries of the workshop are removed with it."
)
def remove_workshop(wk_code: int, db: Session = Depends(get_db)):
    try:
        count = services.delete_workshop(db, wk_code)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed(f"DELETE /api/workshops/{wk_code}", f"Failed to delete workshop code {wk_code}.")
    return {"message": f"Workshop code {wk_code} and related records deleted successfully.", "affected_rows": count}
