"""
Schema definitions for Area In-Charge and Area
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional


# Area In-Charge creation
class AICCreateRequest(BaseModel):
    ID: int = Field(
        ...,
        description="Caller-supplied identifier of the area in-charge"
    )
    FirstName: str = Field(..., min_length=1, description="First name")
    MiddleName: Optional[str] = Field(None, description="Middle name, if any")
    LastName: str = Field(..., min_length=1, description="Last name")


# Area In-Charge update
class AICUpdateRequest(BaseModel):
    FirstName: str = Field(..., min_length=1, description="Updated first name")
    MiddleName: Optional[str] = Field(None, description="Updated middle name")
    LastName: str = Field(..., min_length=1, description="Updated last name")


class AICResponse(BaseModel):
    ID: int
    FirstName: str
    MiddleName: Optional[str] = None
    LastName: str


# Area creation
class AreaCreateRequest(BaseModel):
    Area_Name: str = Field(
        ...,
        min_length=1,
        description="Area name; surrounding whitespace is removed before storage"
    )
    AIC_ID: int = Field(
        ...,
        description="ID of the supervising area in-charge"
    )

    @field_validator("Area_Name")
    @classmethod
    def reject_blank_name(cls, v):
        if not v.strip():
            raise ValueError("Area name cannot be blank")
        return v


class AreaResponse(BaseModel):
    Area_Name: str
    AIC_ID: int
