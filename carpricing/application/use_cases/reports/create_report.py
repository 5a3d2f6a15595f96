# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from carpricing.domain.reports.entities import Report
from carpricing.domain.reports.repositories import ReportRepository
from carpricing.domain.users.entities import User
from carpricing.shared.logging import logger


@dataclass(slots=True, frozen=True)
class CreateReportInput:
    price: float
    make: str
    model: str
    year: int
    longitude: float
    latitude: float
    mileage: float = 0


class CreateReportUseCase:
    def __init__(self, *, reports: ReportRepository) -> None:
        self._reports = reports

    def execute(self, owner: User, data: CreateReportInput) -> Report:
        report = Report(
            id=0,
            price=data.price,
            make=data.make,
            model=data.model,
            year=data.year,
            longitude=data.longitude,
            latitude=data.latitude,
            mileage=data.mileage,
            user_id=owner.id,
            approved=False,
            created_at=datetime.now(UTC),
        )
        persisted = self._reports.add(report)
        logger.info(f"reports.create: report_id={persisted.id} user_id={owner.id}")
        return persisted
