# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from carpricing.application.services.identity import IdentityResolver
from carpricing.application.services.password_hashing import ScryptPasswordHasher
from carpricing.application.services.sessions import SessionStore
from carpricing.application.use_cases.reports.change_approval import ChangeApprovalUseCase
from carpricing.application.use_cases.reports.create_report import CreateReportUseCase
from carpricing.application.use_cases.reports.estimate_price import EstimatePriceUseCase
from carpricing.application.use_cases.users.delete_user import DeleteUserUseCase
from carpricing.application.use_cases.users.get_user import (
    FindUserByEmailUseCase,
    GetUserUseCase,
)
from carpricing.application.use_cases.users.login_user import LoginUserUseCase
from carpricing.application.use_cases.users.logout_user import LogoutUserUseCase
from carpricing.application.use_cases.users.register_user import RegisterUserUseCase
from carpricing.application.use_cases.users.update_user import UpdateUserUseCase
from carpricing.infrastructure.db import Database
from carpricing.infrastructure.repositories.reports import SqlAlchemyReportRepository
from carpricing.infrastructure.repositories.users import SqlAlchemyUserRepository
from carpricing.interfaces.http.controllers.reports_controller import ReportsController
from carpricing.interfaces.http.controllers.users_controller import UsersController
from carpricing.interfaces.http.pipeline import RequestPipeline
from carpricing.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> ScryptPasswordHasher:
        return ScryptPasswordHasher(self.config.hashing)

    @cached_property
    def session_store(self) -> SessionStore:
        return SessionStore(self.config.secret_key, max_age=self.config.session.lifetime)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def report_repository(self) -> SqlAlchemyReportRepository:
        return SqlAlchemyReportRepository(self.database)

    @cached_property
    def identity_resolver(self) -> IdentityResolver:
        return IdentityResolver(users=self.user_repository)

    @cached_property
    def pipeline(self) -> RequestPipeline:
        return RequestPipeline(
            sessions=self.session_store,
            resolver=self.identity_resolver,
            cookie=self.config.session,
        )

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase()

    @cached_property
    def get_user_use_case(self) -> GetUserUseCase:
        return GetUserUseCase(users=self.user_repository)

    @cached_property
    def find_user_by_email_use_case(self) -> FindUserByEmailUseCase:
        return FindUserByEmailUseCase(users=self.user_repository)

    @cached_property
    def update_user_use_case(self) -> UpdateUserUseCase:
        return UpdateUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def delete_user_use_case(self) -> DeleteUserUseCase:
        return DeleteUserUseCase(users=self.user_repository)

    # Report use cases

    @cached_property
    def create_report_use_case(self) -> CreateReportUseCase:
        return CreateReportUseCase(reports=self.report_repository)

    @cached_property
    def change_approval_use_case(self) -> ChangeApprovalUseCase:
        return ChangeApprovalUseCase(reports=self.report_repository)

    @cached_property
    def estimate_price_use_case(self) -> EstimatePriceUseCase:
        return EstimatePriceUseCase(reports=self.report_repository)

    # Controllers

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            pipeline=self.pipeline,
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            get_user_use_case=self.get_user_use_case,
            find_by_email_use_case=self.find_user_by_email_use_case,
            update_use_case=self.update_user_use_case,
            delete_use_case=self.delete_user_use_case,
        )

    @cached_property
    def reports_controller(self) -> ReportsController:
        return ReportsController(
            pipeline=self.pipeline,
            create_use_case=self.create_report_use_case,
            approval_use_case=self.change_approval_use_case,
            estimate_use_case=self.estimate_price_use_case,
        )
