"""
Schema definitions for Workshop In-Charge and the Manages relation
"""

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional


class WICCreateRequest(BaseModel):
    WkICID: int = Field(..., description="Caller-supplied identifier of the workshop in-charge")
    FName: str = Field(..., min_length=1, description="First name")
    MName: Optional[str] = Field(None, description="Middle name, if any")
    LName: str = Field(..., min_length=1, description="Last name")
    Rating: int = Field(..., description="Performance rating")
    AreaIC: int = Field(..., description="ID of the supervising area in-charge")


class WICUpdateRequest(BaseModel):
    FName: str = Field(..., min_length=1)
    MName: Optional[str] = None
    LName: str = Field(..., min_length=1)
    Rating: int
    AreaIC: int = Field(..., description="Supervising area in-charge; may be reassigned")


class WICResponse(BaseModel):
    WkICID: int
    FName: str
    MName: Optional[str] = None
    LName: str
    Rating: int
    AreaIC: int


class ManagesCreateRequest(BaseModel):
    WkshpID: int = Field(
        ...,
        validation_alias=AliasChoices("WkshpID", "wk_code"),
        description="Code of the managed workshop"
    )
    ICID: int = Field(
        ...,
        validation_alias=AliasChoices("ICID", "ic_id"),
        description="ID of the managing workshop in-charge"
    )


class ManagesResponse(BaseModel):
    WkshpID: int
    ICID: int
