from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime

import pytest
from conftest import make_user

from carpricing.domain.reports.entities import EstimateQuery, Report
from carpricing.domain.reports.estimation import estimate_price
from carpricing.domain.users.exceptions import EmailInUseError
from carpricing.infrastructure.admin_setup import setup_admin_user
from carpricing.infrastructure.db import Database
from carpricing.infrastructure.repositories.reports import SqlAlchemyReportRepository
from carpricing.infrastructure.repositories.users import SqlAlchemyUserRepository
from carpricing.shared.config import DatabaseConfig


@pytest.fixture()
def database() -> Iterator[Database]:
    db = Database(DatabaseConfig(DATABASE_URL="sqlite://"))  # type: ignore[call-arg]
    db.init_schema()
    yield db
    db.drop_schema()
    db.dispose()


@pytest.fixture()
def user_repo(database: Database) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(database)


@pytest.fixture()
def report_repo(database: Database) -> SqlAlchemyReportRepository:
    return SqlAlchemyReportRepository(database)


def _report(owner_id: int, price: float, mileage: float, **overrides: object) -> Report:
    fields: dict[str, object] = {
        "id": 0,
        "price": price,
        "make": "toyota",
        "model": "corolla",
        "year": 1980,
        "longitude": 0,
        "latitude": 0,
        "mileage": mileage,
        "user_id": owner_id,
        "approved": True,
        "created_at": datetime.now(UTC),
    }
    fields.update(overrides)
    return Report(**fields)  # type: ignore[arg-type]


def test_user_add_and_lookup(user_repo: SqlAlchemyUserRepository) -> None:
    created = user_repo.add(make_user(0, email="alice@example.com"))

    assert created.id > 0
    assert user_repo.find_by_id(created.id) == created
    assert user_repo.find_by_email("alice@example.com") == created
    assert user_repo.find_by_email("bob@example.com") is None


def test_duplicate_email_raises_conflict(user_repo: SqlAlchemyUserRepository) -> None:
    user_repo.add(make_user(0, email="alice@example.com"))

    with pytest.raises(EmailInUseError):
        user_repo.add(make_user(0, email="alice@example.com"))


def test_deleting_user_removes_reports(
    user_repo: SqlAlchemyUserRepository, report_repo: SqlAlchemyReportRepository
) -> None:
    owner = user_repo.add(make_user(0))
    report = report_repo.add(_report(owner.id, 5000, 100))

    user_repo.delete(owner.id)

    assert user_repo.find_by_id(owner.id) is None
    assert report_repo.find_by_id(report.id) is None


def test_approval_is_persisted(
    user_repo: SqlAlchemyUserRepository, report_repo: SqlAlchemyReportRepository
) -> None:
    owner = user_repo.add(make_user(0))
    report = report_repo.add(_report(owner.id, 5000, 100, approved=False))

    report_repo.update(report.with_approval(True))

    stored = report_repo.find_by_id(report.id)
    assert stored is not None and stored.approved is True


def test_aggregate_matches_domain_estimate(
    user_repo: SqlAlchemyUserRepository, report_repo: SqlAlchemyReportRepository
) -> None:
    owner = user_repo.add(make_user(0))
    rows = [
        _report(owner.id, 9000, 90000),
        _report(owner.id, 7000, 100000),
        _report(owner.id, 5000, 110000),
        _report(owner.id, 1000, 100000, approved=False),
        _report(owner.id, 1000, 100000, longitude=6),
        _report(owner.id, 1000, 100000, year=1984),
        _report(owner.id, 3000, 100200),
    ]
    stored = [report_repo.add(row) for row in rows]
    query = EstimateQuery(
        make="toyota", model="corolla", year=1980, longitude=0, latitude=0, mileage=100000
    )

    assert report_repo.aggregate_estimate(query) == pytest.approx((9000 + 5000 + 3000) / 3)
    assert report_repo.aggregate_estimate(query) == pytest.approx(estimate_price(stored, query))


def test_aggregate_without_comparables_is_none(
    user_repo: SqlAlchemyUserRepository, report_repo: SqlAlchemyReportRepository
) -> None:
    owner = user_repo.add(make_user(0))
    report_repo.add(_report(owner.id, 9000, 90000, approved=False))
    query = EstimateQuery(make="toyota", model="corolla", year=1980, longitude=0, latitude=0)

    assert report_repo.aggregate_estimate(query) is None


def test_admin_setup_grants_privileges(
    database: Database, user_repo: SqlAlchemyUserRepository
) -> None:
    created = user_repo.add(make_user(0, email="admin@example.com"))

    assert setup_admin_user(database, None) is False
    assert setup_admin_user(database, "missing@example.com") is False
    assert setup_admin_user(database, "admin@example.com") is True

    promoted = user_repo.find_by_id(created.id)
    assert promoted is not None and promoted.is_privileged


def test_ids_beyond_integer_column_are_misses(
    user_repo: SqlAlchemyUserRepository, report_repo: SqlAlchemyReportRepository
) -> None:
    huge = 99999999999999999999

    assert user_repo.find_by_id(huge) is None
    assert report_repo.find_by_id(huge) is None
    user_repo.delete(huge)
