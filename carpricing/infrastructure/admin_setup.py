# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from carpricing.infrastructure.db.models import User
from carpricing.infrastructure.db.session import Database
from carpricing.shared.logging import logger


class AdminSetupError(Exception):
    pass


def setup_admin_user(database: Database, admin_email: str | None) -> bool:
    """Grant privileges to the configured account; return whether it is privileged."""

    if not admin_email:
        logger.info("admin_setup: No ADMIN_EMAIL configured, skipping admin setup")
        return False

    try:
        with database.session_scope() as session:
            user = session.scalars(select(User).where(User.email == admin_email)).first()

            if not user:
                logger.warning(
                    "admin_setup: ADMIN_EMAIL is not registered yet, "
                    "restart after the account signs up"
                )
                return False

            if not user.is_privileged:
                user.is_privileged = True
                logger.info(f"admin_setup: Granted admin privileges to user_id={user.id}")
            else:
                logger.info(f"admin_setup: user_id={user.id} already has admin privileges")
            return True
    except SQLAlchemyError as e:
        logger.error(f"admin_setup: Failed to setup admin user: {type(e).__name__}")
        raise AdminSetupError("Failed to setup admin user") from e


__all__ = [
    "AdminSetupError",
    "setup_admin_user",
]
