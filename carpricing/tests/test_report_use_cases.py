from __future__ import annotations

import pytest
from conftest import InMemoryReportRepository, make_user

from carpricing.application.use_cases.reports.change_approval import ChangeApprovalUseCase
from carpricing.application.use_cases.reports.create_report import (
    CreateReportInput,
    CreateReportUseCase,
)
from carpricing.application.use_cases.reports.estimate_price import EstimatePriceUseCase
from carpricing.domain.reports.entities import EstimateQuery
from carpricing.domain.reports.exceptions import ReportNotFoundError


def _input(price: float, mileage: float) -> CreateReportInput:
    return CreateReportInput(
        price=price,
        make="toyota",
        model="corolla",
        year=1980,
        longitude=0,
        latitude=0,
        mileage=mileage,
    )


QUERY = EstimateQuery(
    make="toyota", model="corolla", year=1980, longitude=0, latitude=0, mileage=100000
)


def test_new_reports_start_unapproved(reports: InMemoryReportRepository) -> None:
    owner = make_user(4)

    report = CreateReportUseCase(reports=reports).execute(owner, _input(5000, 100))

    assert report.id == 1
    assert report.user_id == owner.id
    assert report.approved is False
    assert report.created_at is not None


def test_estimate_needs_approval(reports: InMemoryReportRepository) -> None:
    create = CreateReportUseCase(reports=reports)
    approve = ChangeApprovalUseCase(reports=reports)
    estimate = EstimatePriceUseCase(reports=reports)
    owner = make_user(1)

    created = [
        create.execute(owner, _input(9000, 90000)),
        create.execute(owner, _input(7000, 100000)),
        create.execute(owner, _input(5000, 110000)),
    ]
    assert estimate.execute(QUERY) is None

    for report in created:
        assert approve.execute(report.id, True).approved
    assert estimate.execute(QUERY) == 7000.0

    assert approve.execute(created[0].id, False).approved is False
    assert estimate.execute(QUERY) == 6000.0


def test_change_approval_of_missing_report(reports: InMemoryReportRepository) -> None:
    with pytest.raises(ReportNotFoundError) as exc_info:
        ChangeApprovalUseCase(reports=reports).execute(12, True)

    assert exc_info.value.status == 404
