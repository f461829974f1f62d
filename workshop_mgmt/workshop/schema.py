"""
Schema definitions for Workshop and Revenue

Workshop payloads accept both the snake_case column names and the camelCase
names used by the original browser client (wkCode, wkName, wkArea).
"""

from decimal import Decimal
from pydantic import AliasChoices, BaseModel, BeforeValidator, Field
from typing import Literal, Optional
from typing_extensions import Annotated


def _lower_recovery(v):
    if isinstance(v, str):
        return v.strip().lower()
    return v


# "Yes" / " NO " are accepted and stored as yes / no
RecoveryFlag = Annotated[Optional[Literal["yes", "no"]], BeforeValidator(_lower_recovery)]


# Workshop creation
class WorkshopCreateRequest(BaseModel):
    wk_code: int = Field(
        ...,
        validation_alias=AliasChoices("wk_code", "wkCode"),
        description="Caller-supplied workshop code"
    )
    wk_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("wk_name", "wkName"),
        description="Workshop name"
    )
    area: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("area", "wkArea"),
        description="Name of an existing area; trimmed and title-cased before storage"
    )
    manpower: int = Field(..., description="Number of staff")
    customer_visits: Optional[int] = Field(None, description="Customer visits in the period")
    recovery: RecoveryFlag = Field(None, description="Recovery service offered")


# Workshop update; every mutable field is rewritten
class WorkshopUpdateRequest(BaseModel):
    wk_name: str = Field(..., min_length=1, validation_alias=AliasChoices("wk_name", "wkName"))
    area: str = Field(..., min_length=1, validation_alias=AliasChoices("area", "wkArea"))
    manpower: int
    customer_visits: Optional[int] = None
    recovery: RecoveryFlag = None


class WorkshopResponse(BaseModel):
    wk_code: int
    wk_name: str
    area: str
    manpower: int
    customer_visits: Optional[int] = None
    recovery: Optional[str] = None
    score: Optional[float] = Field(None, description="Computed by the store")


# Revenue creation
class RevenueCreateRequest(BaseModel):
    wkcode: int = Field(
        ...,
        validation_alias=AliasChoices("wkcode", "wk_code", "wkCode"),
        description="Code of the workshop the revenue belongs to"
    )
    year: int
    quarter: int = Field(..., ge=1, le=4)
    total_sales: Decimal
    service_cost: Optional[Decimal] = None


# Revenue update; the key comes from the path
class RevenueUpdateRequest(BaseModel):
    total_sales: Decimal
    service_cost: Decimal


class RevenueResponse(BaseModel):
    wkcode: int
    year: int
    quarter: int
    total_sales: float
    service_cost: Optional[float] = None
    profit: Optional[float] = Field(None, description="Computed by the store")
