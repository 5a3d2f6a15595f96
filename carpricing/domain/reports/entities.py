# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Price observations and the vehicle profile they are compared against."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from carpricing.domain.exceptions import InvariantViolation

MIN_YEAR = 1900
MAX_MILEAGE = 1_000_000


def max_year() -> int:
    return datetime.now(UTC).year + 1


def _check_vehicle(
    *,
    make: str,
    model: str,
    year: int,
    longitude: float,
    latitude: float,
    mileage: float,
) -> None:
    if not make:
        raise InvariantViolation("make must not be empty", field="make")
    if not model:
        raise InvariantViolation("model must not be empty", field="model")
    if not MIN_YEAR <= year <= max_year():
        raise InvariantViolation(f"year must be within [{MIN_YEAR}, {max_year()}]", field="year")
    if not -180 <= longitude <= 180:
        raise InvariantViolation("longitude must be within [-180, 180]", field="longitude")
    if not -90 <= latitude <= 90:
        raise InvariantViolation("latitude must be within [-90, 90]", field="latitude")
    if not 0 <= mileage <= MAX_MILEAGE:
        raise InvariantViolation(f"mileage must be within [0, {MAX_MILEAGE}]", field="mileage")


@dataclass(slots=True, frozen=True)
class Report:
    """A price reported by a user for a concrete vehicle."""

    id: int
    price: float
    make: str
    model: str
    year: int
    longitude: float
    latitude: float
    mileage: float
    user_id: int
    approved: bool = False
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "make", self.make.strip())
        object.__setattr__(self, "model", self.model.strip())
        if self.price < 0:
            raise InvariantViolation("price must be non-negative", field="price")
        _check_vehicle(
            make=self.make,
            model=self.model,
            year=self.year,
            longitude=self.longitude,
            latitude=self.latitude,
            mileage=self.mileage,
        )

    def with_approval(self, approved: bool) -> Report:
        return Report(
            id=self.id,
            price=self.price,
            make=self.make,
            model=self.model,
            year=self.year,
            longitude=self.longitude,
            latitude=self.latitude,
            mileage=self.mileage,
            user_id=self.user_id,
            approved=approved,
            created_at=self.created_at,
        )


@dataclass(slots=True, frozen=True)
class EstimateQuery:
    """Vehicle profile a price estimate is requested for."""

    make: str
    model: str
    year: int
    longitude: float
    latitude: float
    mileage: float = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "make", self.make.strip())
        object.__setattr__(self, "model", self.model.strip())
        _check_vehicle(
            make=self.make,
            model=self.model,
            year=self.year,
            longitude=self.longitude,
            latitude=self.latitude,
            mileage=self.mileage,
        )
