# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from carpricing.domain.users.entities import User as DomainUser
from carpricing.domain.users.exceptions import EmailInUseError, UserNotFoundError
from carpricing.domain.users.repositories import UserRepository
from carpricing.infrastructure.db.models import User
from carpricing.infrastructure.db.session import Database, is_storable_id


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        is_privileged=bool(row.is_privileged),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_id(self, user_id: int) -> DomainUser | None:
        if not is_storable_id(user_id):
            return None
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(
                    name=user.name,
                    email=user.email,
                    password_hash=user.password_hash,
                    is_privileged=user.is_privileged,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise EmailInUseError() from exc

    def update(self, user: DomainUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = session.get(User, user.id)
                if row is None:
                    raise UserNotFoundError(context={"user_id": user.id})
                row.name = user.name
                row.email = user.email
                row.password_hash = user.password_hash
                row.is_privileged = user.is_privileged
                row.updated_at = user.updated_at
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            raise EmailInUseError() from exc

    def delete(self, user_id: int) -> None:
        if not is_storable_id(user_id):
            return
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            if row is not None:
                session.delete(row)
