# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import func, select

from carpricing.domain.reports.entities import EstimateQuery
from carpricing.domain.reports.entities import Report as DomainReport
from carpricing.domain.reports.estimation import (
    COORDINATE_WINDOW,
    SAMPLE_SIZE,
    YEAR_WINDOW,
)
from carpricing.domain.reports.exceptions import ReportNotFoundError
from carpricing.domain.reports.repositories import ReportRepository
from carpricing.infrastructure.db.models import Report
from carpricing.infrastructure.db.session import Database, is_storable_id


def _to_domain(row: Report) -> DomainReport:
    return DomainReport(
        id=row.id,
        price=row.price,
        make=row.make,
        model=row.model,
        year=row.year,
        longitude=row.longitude,
        latitude=row.latitude,
        mileage=row.mileage,
        user_id=row.user_id,
        approved=bool(row.approved),
        created_at=row.created_at,
    )


class SqlAlchemyReportRepository(ReportRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_id(self, report_id: int) -> DomainReport | None:
        if not is_storable_id(report_id):
            return None
        with self._db.session_scope() as session:
            row = session.get(Report, report_id)
            return _to_domain(row) if row else None

    def add(self, report: DomainReport) -> DomainReport:
        with self._db.session_scope() as session:
            row = Report(
                user_id=report.user_id,
                price=report.price,
                make=report.make,
                model=report.model,
                year=report.year,
                longitude=report.longitude,
                latitude=report.latitude,
                mileage=report.mileage,
                approved=report.approved,
            )
            if report.created_at is not None:
                row.created_at = report.created_at
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def update(self, report: DomainReport) -> DomainReport:
        with self._db.session_scope() as session:
            row = session.get(Report, report.id)
            if row is None:
                raise ReportNotFoundError(context={"report_id": report.id})
            row.price = report.price
            row.make = report.make
            row.model = report.model
            row.year = report.year
            row.longitude = report.longitude
            row.latitude = report.latitude
            row.mileage = report.mileage
            row.approved = report.approved
            session.flush()
            return _to_domain(row)

    def aggregate_estimate(self, query: EstimateQuery) -> float | None:
        """Average price of the comparables picked by ``domain.reports.estimation``."""

        comparables = (
            select(Report.price)
            .where(
                Report.approved.is_(True),
                Report.make == query.make,
                Report.model == query.model,
                func.abs(Report.longitude - query.longitude) <= COORDINATE_WINDOW,
                func.abs(Report.latitude - query.latitude) <= COORDINATE_WINDOW,
                func.abs(Report.year - query.year) <= YEAR_WINDOW,
            )
            .order_by(func.abs(Report.mileage - query.mileage).desc(), Report.id.asc())
            .limit(SAMPLE_SIZE)
            .subquery()
        )
        with self._db.session_scope() as session:
            average = session.execute(select(func.avg(comparables.c.price))).scalar_one_or_none()
        return float(average) if average is not None else None
