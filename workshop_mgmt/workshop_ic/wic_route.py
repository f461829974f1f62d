import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from workshop_mgmt.database import get_db
from workshop_mgmt.errors import WorkshopDomainError
from workshop_mgmt.workshop_ic import services
from workshop_mgmt.workshop_ic.schema import (
    ManagesCreateRequest,
    ManagesResponse,
    WICCreateRequest,
    WICResponse,
    WICUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(
prefix="/api/wics",
tags=["Workshop In-Charge"]
)


def _failed(route: str, detail: str) -> HTTPException:
    logger.exception(f"Route error in {route}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.get("/search", response_model=List[WICResponse], summary="Search Workshop In-Charges")
def search_wics(
    term: Optional[str] = Query(None, description="Name fragment to search for"),
    db: Session = Depends(get_db)
):
    try:
        return [services.wic_to_response(w) for w in services.search_wics(db, term)]
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("GET /api/wics/search", f"Failed to search WICs for term: {term}")


@router.get(
    "/area/{area_ic_id}",
    response_model=List[WICResponse],
    summary="Workshop In-Charges by Area In-Charge"
)
def get_wics_by_area_ic(area_ic_id: int, db: Session = Depends(get_db)):
    try:
        return [services.wic_to_response(w) for w in services.list_wics_by_area_ic(db, area_ic_id)]
    except Exception:
        raise _failed(
            f"GET /api/wics/area/{area_ic_id}",
            f"Failed to fetch WICs for Area IC ID {area_ic_id}."
        )


# --- MANAGES RELATIONSHIP ROUTES ---

@router.get("/manages", response_model=List[ManagesResponse], summary="List management links")
def get_manages(db: Session = Depends(get_db)):
    try:
        return [services.manages_to_response(m) for m in services.list_manages(db)]
    except Exception:
        raise _failed("GET /api/wics/manages", "Failed to fetch all management relationships.")


@router.get(
    "/manages/workshop/{wk_code}",
    response_model=List[ManagesResponse],
    summary="Workshop In-Charges managing a workshop"
)
def get_manages_by_workshop(wk_code: int, db: Session = Depends(get_db)):
    try:
        return [services.manages_to_response(m) for m in services.list_manages_by_workshop(db, wk_code)]
    except Exception:
        raise _failed(
            f"GET /api/wics/manages/workshop/{wk_code}",
            f"Failed to fetch WICs managing workshop {wk_code}."
        )


@router.get(
    "/manages/ic/{ic_id}",
    response_model=List[ManagesResponse],
    summary="Workshops managed by a Workshop In-Charge"
)
def get_manages_by_wic(ic_id: int, db: Session = Depends(get_db)):
    try:
        return [services.manages_to_response(m) for m in services.list_manages_by_wic(db, ic_id)]
    except Exception:
        raise _failed(
            f"GET /api/wics/manages/ic/{ic_id}",
            f"Failed to fetch workshops managed by IC {ic_id}."
        )


@router.post("/manages", status_code=status.HTTP_201_CREATED, summary="Create management link")
def add_manages(data: ManagesCreateRequest, db: Session = Depends(get_db)):
    try:
        services.add_manages(db, data)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("POST /api/wics/manages", "Failed to add management relationship.")
    return {
        "message": "Management relationship established successfully.",
        "WkshpID": data.WkshpID,
        "ICID": data.ICID,
    }


@router.delete("/manages/{wk_code}/{ic_id}", summary="Delete management link")
def remove_manages(wk_code: int, ic_id: int, db: Session = Depends(get_db)):
    try:
        count = services.delete_manages(db, wk_code, ic_id)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("DELETE /api/wics/manages", "Failed to delete management relationship.")
    return {"message": "Management relationship deleted successfully.", "affected_rows": count}


# --- WORKSHOP IN-CHARGE ROUTES ---

@router.get("", response_model=List[WICResponse], summary="List Workshop In-Charges")
def get_wics(db: Session = Depends(get_db)):
    try:
        return [services.wic_to_response(w) for w in services.list_wics(db)]
    except Exception:
        raise _failed("GET /api/wics", "Failed to fetch all Workshop In-Charges.")


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create Workshop In-Charge")
def add_wic(data: WICCreateRequest, db: Session = Depends(get_db)):
    try:
        services.add_wic(db, data)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed("POST /api/wics", "Failed to add Workshop In-Charge.")
    return {"message": "Workshop In-Charge added successfully.", "WkICID": data.WkICID}


@router.put("/{wic_id}", summary="Update Workshop In-Charge")
def edit_wic(wic_id: int, data: WICUpdateRequest, db: Session = Depends(get_db)):
    try:
        count = services.update_wic(db, wic_id, data)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed(f"PUT /api/wics/{wic_id}", f"Failed to update WIC ID {wic_id}.")
    return {"message": f"WIC ID {wic_id} updated successfully.", "affected_rows": count}


@router.delete(
    "/{wic_id}",
    summary="Delete Workshop In-Charge",
    description="Fails while the Workshop In-Charge still manages workshops."
)
def remove_wic(wic_id: int, db: Session = Depends(get_db)):
    try:
        count = services.delete_wic(db, wic_id)
    except WorkshopDomainError:
        raise
    except Exception:
        raise _failed(f"DELETE /api/wics/{wic_id}", f"Failed to delete WIC ID {wic_id}.")
    return {"message": f"WIC ID {wic_id} deleted successfully.", "affected_rows": count}
