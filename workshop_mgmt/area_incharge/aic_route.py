import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from workshop_mgmt.database import get_db
from workshop_mgmt.errors import WorkshopDomainError
from workshop_mgmt.area_incharge import services
from workshop_mgmt.area_incharge.schema import (
    AICCreateRequest,
    AICResponse,
    AICUpdateRequest,
    AreaCreateRequest,
    AreaResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
prefix="/api/aics",
tags=["Area In-Charge"]
)

# Literal paths (/search, /areas...) are registered before the /{aic_id} routes.


@router.get(
    "/search",
    response_model=List[AICResponse],
    summary="Search Area In-Charges",
    description="Case-insensitive substring search over first, middle and last name."
)
def search_aics(
    term: Optional[str] = Query(None, description="Name fragment to search for"),
    db: Session = Depends(get_db)
):
    try:
        return [services.aic_to_response(a) for a in services.search_aics(db, term)]
    except WorkshopDomainError:
        raise
    except Exception:
        logger.exception("Route error in GET /api/aics/search")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to search Area In-Charges for term: {term}"
        )


# --- AREA ROUTES ---

@router.get(
    "/areas",
    response_model=List[AreaResponse],
    summary="List Areas",
    description="All areas, ordered by name without regard to case."
)
def get_areas(db: Session = Depends(get_db)):
    try:
        return [services.area_to_response(a) for a in services.list_areas(db)]
    except Exception:
        logger.exception("Route error in GET /api/aics/areas")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch all areas."
        )


@router.post(
    "/areas",
    status_code=status.HTTP_201_CREATED,
    summary="Create Area",
    description="Create an area supervised by an existing Area In-Charge."
)
def add_area(data: AreaCreateRequest, db: Session = Depends(get_db)):
    try:
        services.add_area(db, data)
    except WorkshopDomainError:
        raise
    except Exception:
        logger.exception("Route error in POST /api/aics/areas")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add Area."
        )
    area_name = data.Area_Name.strip()
    return {"message": f"Area '{area_name}' added successfully.", "Area_Name": area_name}


@router.delete(
    "/areas/{area_name:path}",
    status_code=status.HTTP_200_OK,
    summary="Delete Area",
    description="Delete an area by name. Fails while workshops still reference it."
)
def delete_area(area_name: str, db: Session = Depends(get_db)):
    try:
        count = services.delete_area(db, area_name)
    except WorkshopDomainError:
        raise
    except Exception:
        logger.exception(f"Route error in DELETE /api/aics/areas/{area_name}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete area '{area_name}'."
        )
    return {"message": f"Area '{area_name}' deleted successfully.", "affected_rows": count}


@router.get(
    "/{aic_id}/areas",
    response_model=List[AreaResponse],
    summary="Areas by Area In-Charge"
)
def get_areas_by_aic(aic_id: int, db: Session = Depends(get_db)):
    try:
        return [services.area_to_response(a) for a in services.list_areas_by_aic(db, aic_id)]
    except Exception:
        logger.exception(f"Route error in GET /api/aics/{aic_id}/areas")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch areas for AIC ID {aic_id}."
        )


# --- AREA IN-CHARGE ROUTES ---

@router.get(
    "",
    response_model=List[AICResponse],
    summary="List Area In-Charges"
)
def get_aics(db: Session = Depends(get_db)):
    try:
        return [services.aic_to_response(a) for a in services.list_aics(db)]
    except Exception:
        logger.exception("Route error in GET /api/aics")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch all Area In-Charges."
        )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Area In-Charge"
)
def add_aic(data: AICCreateRequest, db: Session = Depends(get_db)):
    try:
        services.add_aic(db, data)
    except WorkshopDomainError:
        raise
    except Exception:
        logger.exception("Route error in POST /api/aics")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add Area In-Charge."
        )
    return {"message": "Area In-Charge added successfully.", "ID": data.ID}


@router.put(
    "/{aic_id}",
    status_code=status.HTTP_200_OK,
    summary="Update Area In-Charge"
)
def edit_aic(aic_id: int, data: AICUpdateRequest, db: Session = Depends(get_db)):
    try:
        count = services.update_aic(db, aic_id, data)
    except WorkshopDomainError:
        raise
    except Exception:
        logger.exception(f"Route error in PUT /api/aics/{aic_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update Area In-Charge ID {aic_id}."
        )
    return {"message": f"Area In-Charge ID {aic_id} updated successfully.", "affected_rows": count}


@router.delete(
    "/{aic_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete Area In-Charge",
    description="Fails while the Area In-Charge still supervises areas or workshop in-charges."
)
def remove_aic(aic_id: int, db: Session = Depends(get_db)):
    try:
        count = services.delete_aic(db, aic_id)
    except WorkshopDomainError:
        raise
    except Exception:
        logger.exception(f"Route error in DELETE /api/aics/{aic_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete Area In-Charge ID {aic_id}."
        )
    return {"message": f"Area In-Charge ID {aic_id} deleted successfully.", "affected_rows": count}
