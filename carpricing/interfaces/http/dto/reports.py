from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from carpricing.domain.reports.entities import MAX_MILEAGE, MIN_YEAR, max_year
from carpricing.shared.errors.validation_types import ValidationErrorType


class VehicleProfileDTO(BaseModel):
    make: str = Field(min_length=1, max_length=128)
    model: str = Field(min_length=1, max_length=128)
    year: int = Field(ge=MIN_YEAR)
    longitude: float = Field(ge=-180, le=180, validation_alias=AliasChoices("longitude", "lng"))
    latitude: float = Field(ge=-90, le=90, validation_alias=AliasChoices("latitude", "lat"))
    mileage: float = Field(0, ge=0, le=MAX_MILEAGE)

    @field_validator("make", "model")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError(ValidationErrorType.BLANK, "Value cannot be blank", {})
        return value

    @field_validator("year")
    @classmethod
    def validate_year(cls, value: int) -> int:
        upper = max_year()
        if value > upper:
            raise PydanticCustomError(
                ValidationErrorType.YEAR_OUT_OF_RANGE,
                "Year must not be later than {max_year}",
                {"max_year": upper},
            )
        return value


class CreateReportRequestDTO(VehicleProfileDTO):
    price: float = Field(ge=0)


class EstimateQueryDTO(VehicleProfileDTO):
    pass


class ApproveReportRequestDTO(BaseModel):
    approved: bool


def _owner_id(owner: Any) -> Any:
    if isinstance(owner, Mapping):
        return owner.get("id")
    return getattr(owner, "id", None)


class ReportDTO(BaseModel):
    """Outbound report shape; an embedded owner collapses to its id."""

    model_config = ConfigDict(extra="ignore")

    id: int
    price: float
    make: str
    model: str
    year: int
    longitude: float
    latitude: float
    mileage: float
    approved: bool
    user_id: int

    @model_validator(mode="before")
    @classmethod
    def derive_user_id(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and data.get("user_id") is None and "user" in data:
            return {**data, "user_id": _owner_id(data["user"])}
        return data


class EstimateDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    price: float | None
