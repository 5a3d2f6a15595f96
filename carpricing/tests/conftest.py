from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

import pytest
from flask import Flask

from carpricing.app import create_app
from carpricing.domain.reports.entities import EstimateQuery, Report
from carpricing.domain.reports.estimation import estimate_price
from carpricing.domain.reports.repositories import ReportRepository
from carpricing.domain.users.entities import User
from carpricing.domain.users.repositories import PasswordHasher, UserRepository
from carpricing.shared.config import AppConfig, DatabaseConfig, HashingConfig


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1
        self.lookups: list[int] = []

    def find_by_id(self, user_id: int) -> User | None:
        self.lookups.append(user_id)
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def add(self, user: User) -> User:
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def update(self, user: User) -> User:
        self._users[user.id] = user
        return user

    def delete(self, user_id: int) -> None:
        self._users.pop(user_id, None)


class InMemoryReportRepository(ReportRepository):
    def __init__(self) -> None:
        self._reports: dict[int, Report] = {}
        self._seq = 1

    def find_by_id(self, report_id: int) -> Report | None:
        return self._reports.get(report_id)

    def add(self, report: Report) -> Report:
        new_report = replace(report, id=self._seq)
        self._seq += 1
        self._reports[new_report.id] = new_report
        return new_report

    def update(self, report: Report) -> Report:
        self._reports[report.id] = report
        return report

    def aggregate_estimate(self, query: EstimateQuery) -> float | None:
        return estimate_price(self._reports.values(), query)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, hashed: str, password: str) -> bool:
        return hashed == f"hashed:{password}"

    @property
    def dummy_hash(self) -> str:
        return "hashed:\x00"


def make_user(user_id: int = 1, *, privileged: bool = False, **overrides: object) -> User:
    now = datetime.now(UTC)
    fields: dict[str, object] = {
        "id": user_id,
        "name": f"user{user_id}",
        "email": f"user{user_id}@example.com",
        "password_hash": "hashed:secret123",
        "created_at": now,
        "updated_at": now,
        "is_privileged": privileged,
    }
    fields.update(overrides)
    return User(**fields)  # type: ignore[arg-type]


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def reports() -> InMemoryReportRepository:
    return InMemoryReportRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def fast_hashing() -> HashingConfig:
    return HashingConfig(SCRYPT_N=2**4)  # type: ignore[call-arg]


@pytest.fixture()
def app_config(fast_hashing: HashingConfig) -> AppConfig:
    return AppConfig(  # type: ignore[call-arg]
        SECRET_KEY="test-secret",
        APP_ENV="testing",
        ADMIN_EMAIL="admin@example.com",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),  # type: ignore[call-arg]
        hashing=fast_hashing,
    )


@pytest.fixture()
def app(app_config: AppConfig, tmp_path: Path) -> Iterator[Flask]:
    flask_app = create_app(app_config, log_file=str(tmp_path / "app.log"))
    yield flask_app
    flask_app.extensions["carpricing.container"].database.dispose()
