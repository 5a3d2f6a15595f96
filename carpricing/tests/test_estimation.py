from __future__ import annotations

import pytest

from carpricing.domain.exceptions import InvariantViolationError
from carpricing.domain.reports.entities import EstimateQuery, Report, max_year
from carpricing.domain.reports.estimation import (
    estimate_price,
    is_comparable,
    select_comparables,
)

_seq = iter(range(1, 1000))


def _report(price: float, mileage: float, **overrides: object) -> Report:
    fields: dict[str, object] = {
        "id": next(_seq),
        "price": price,
        "make": "toyota",
        "model": "corolla",
        "year": 1980,
        "longitude": 0,
        "latitude": 0,
        "mileage": mileage,
        "user_id": 1,
        "approved": True,
    }
    fields.update(overrides)
    return Report(**fields)  # type: ignore[arg-type]


QUERY = EstimateQuery(
    make="toyota", model="corolla", year=1980, longitude=0, latitude=0, mileage=100000
)


def test_mean_of_three_comparables() -> None:
    reports = [_report(9000, 90000), _report(7000, 100000), _report(5000, 110000)]

    assert estimate_price(reports, QUERY) == 7000.0


def test_unapproved_reports_are_ignored() -> None:
    reports = [_report(9000, 100000), _report(1000, 100000, approved=False)]

    assert estimate_price(reports, QUERY) == 9000.0


def test_no_comparables_yields_none() -> None:
    reports = [_report(9000, 100000, make="honda")]

    assert estimate_price(reports, QUERY) is None
    assert estimate_price([], QUERY) is None


def test_furthest_mileage_first() -> None:
    near = _report(1000, 100001)
    mid = _report(2000, 100500)
    far = _report(3000, 150000)
    farthest = _report(4000, 10000)

    sample = select_comparables([near, mid, far, farthest], QUERY)

    assert sample == [farthest, far, mid]
    assert estimate_price([near, mid, far, farthest], QUERY) == 3000.0


def test_ties_keep_storage_order() -> None:
    first = _report(1000, 90000)
    second = _report(2000, 110000)

    assert select_comparables([first, second], QUERY) == [first, second]


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"longitude": 5}, True),
        ({"longitude": -5.01}, False),
        ({"latitude": 5}, True),
        ({"latitude": 5.5}, False),
        ({"longitude": 4, "latitude": 4}, True),
        ({"year": 1983}, True),
        ({"year": 1976}, False),
        ({"model": "camry"}, False),
        ({"make": "Toyota"}, False),
    ],
)
def test_windows(overrides: dict[str, object], expected: bool) -> None:
    assert is_comparable(_report(1, 0, **overrides), QUERY) is expected


def test_make_and_model_are_trimmed() -> None:
    report = _report(1, 0, make="  toyota ", model=" corolla")
    query = EstimateQuery(make=" toyota", model="corolla  ", year=1980, longitude=0, latitude=0)

    assert (report.make, report.model) == ("toyota", "corolla")
    assert is_comparable(report, query)


def test_mileage_defaults_to_zero() -> None:
    query = EstimateQuery(make="toyota", model="corolla", year=1980, longitude=0, latitude=0)
    reports = [_report(100, 0), _report(200, 500), _report(300, 1000), _report(400, 10)]

    assert estimate_price(reports, query) == 300.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"make": "  "},
        {"year": 1899},
        {"year": max_year() + 1},
        {"longitude": 181},
        {"latitude": -91},
        {"mileage": -1},
        {"mileage": 1_000_001},
        {"price": -1},
    ],
)
def test_report_invariants(overrides: dict[str, object]) -> None:
    price = overrides.pop("price", 1)
    with pytest.raises(InvariantViolationError):
        _report(price, overrides.pop("mileage", 0), **overrides)  # type: ignore[arg-type]


def test_with_approval_returns_copy() -> None:
    report = _report(1, 0, approved=False)

    approved = report.with_approval(True)
    assert approved.approved and not report.approved
    assert approved.id == report.id


def test_honda_civic_scenario() -> None:
    civic = {"make": "Honda", "model": "Civic", "year": 2020}
    reports = [
        _report(9000, 10000, **civic),
        _report(7000, 50000, **civic),
        _report(5000, 90000, **civic),
    ]
    query = EstimateQuery(longitude=0, latitude=0, mileage=10000, **civic)  # type: ignore[arg-type]

    assert len(select_comparables(reports, query)) == 3
    assert estimate_price(reports, query) == 7000.0
