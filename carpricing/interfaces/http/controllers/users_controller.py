# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint

from carpricing.application.services.access import AuthenticatedGuard
from carpricing.application.use_cases.users.delete_user import DeleteUserUseCase
from carpricing.application.use_cases.users.get_user import (
    FindUserByEmailUseCase,
    GetUserUseCase,
)
from carpricing.application.use_cases.users.login_user import LoginUserUseCase
from carpricing.application.use_cases.users.logout_user import LogoutUserUseCase
from carpricing.application.use_cases.users.register_user import RegisterUserUseCase
from carpricing.application.use_cases.users.update_user import UpdateUserUseCase
from carpricing.interfaces.http.dto.envelope import ApiResponse
from carpricing.interfaces.http.dto.users import (
    EmailQueryDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    UpdateUserRequestDTO,
    UserDTO,
)
from carpricing.interfaces.http.pipeline import RequestContext, RequestPipeline
from carpricing.interfaces.http.projection import FieldProjector
from carpricing.interfaces.http.request_parsing import parse_body, parse_query

USER_PROJECTION = FieldProjector(UserDTO)


class UsersController:
    def __init__(
        self,
        *,
        pipeline: RequestPipeline,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        get_user_use_case: GetUserUseCase,
        find_by_email_use_case: FindUserByEmailUseCase,
        update_use_case: UpdateUserUseCase,
        delete_use_case: DeleteUserUseCase,
    ) -> None:
        self._pipeline = pipeline
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._get_user_use_case = get_user_use_case
        self._find_by_email_use_case = find_by_email_use_case
        self._update_use_case = update_use_case
        self._delete_use_case = delete_use_case

    def register(self, ctx: RequestContext) -> ApiResponse:
        dto = parse_body(RegisterRequestDTO)
        user = self._register_use_case.execute(
            dto.name, dto.email, dto.password, session=ctx.session
        )
        return ApiResponse.ok(
            "register",
            f"User {user.name} has been created successfully",
            user,
            affected_rows=1,
        )

    def login(self, ctx: RequestContext) -> ApiResponse:
        dto = parse_body(LoginRequestDTO)
        user = self._login_use_case.execute(dto.email, dto.password, session=ctx.session)
        return ApiResponse.ok(
            "login", f"User {user.name} has been logged in successfully", user
        )

    def signout(self, ctx: RequestContext) -> ApiResponse:
        self._logout_use_case.execute(ctx.session)
        return ApiResponse.ok("signout", "Signed out successfully")

    def whoami(self, ctx: RequestContext) -> ApiResponse:
        return ApiResponse.ok("whoami", "Current user retrieved", ctx.require_user())

    def get_user(self, ctx: RequestContext, user_id: int) -> ApiResponse:
        user = self._get_user_use_case.execute(user_id)
        return ApiResponse.ok(
            "getUser", f"User with id {user_id} has been retrieved successfully", user
        )

    def find_by_email(self, ctx: RequestContext) -> ApiResponse:
        query = parse_query(EmailQueryDTO)
        user = self._find_by_email_use_case.execute(query.email)
        return ApiResponse.ok("findUserByEmail", "User has been retrieved successfully", user)

    def update_user(self, ctx: RequestContext, user_id: int) -> ApiResponse:
        dto = parse_body(UpdateUserRequestDTO)
        user = self._update_use_case.execute(
            ctx.require_user(),
            user_id,
            name=dto.name,
            email=dto.email,
            password=dto.password,
        )
        return ApiResponse.ok(
            "updateUser",
            f"User with id {user_id} has been updated successfully",
            user,
            affected_rows=1,
        )

    def delete_user(self, ctx: RequestContext, user_id: int) -> ApiResponse:
        user = self._delete_use_case.execute(ctx.require_user(), user_id, session=ctx.session)
        return ApiResponse.ok(
            "deleteUser",
            f"User with id {user_id} has been deleted successfully",
            user,
            affected_rows=1,
        )

    def as_blueprint(self) -> Blueprint:
        authenticated = [AuthenticatedGuard()]
        bp = Blueprint("users", __name__, url_prefix="/api/users")

        def rule(path: str, action: str, handler: Any, methods: list[str], **kwargs: Any) -> None:
            bp.add_url_rule(
                path,
                endpoint=action,
                view_func=self._pipeline.view(action, handler, **kwargs),
                methods=methods,
            )

        rule("/register", "register", self.register, ["POST"],
             projector=USER_PROJECTION, status=HTTPStatus.CREATED)
        rule("/login", "login", self.login, ["POST"], projector=USER_PROJECTION)
        rule("/signout", "signout", self.signout, ["POST"])
        rule("/whoami", "whoami", self.whoami, ["GET"],
             guards=authenticated, projector=USER_PROJECTION)
        rule("", "findUserByEmail", self.find_by_email, ["GET"],
             guards=authenticated, projector=USER_PROJECTION)
        rule("/<int:user_id>", "getUser", self.get_user, ["GET"],
             guards=authenticated, projector=USER_PROJECTION)
        rule("/<int:user_id>", "updateUser", self.update_user, ["PATCH"],
             guards=authenticated, projector=USER_PROJECTION)
        rule("/<int:user_id>", "deleteUser", self.delete_user, ["DELETE"],
             guards=authenticated, projector=USER_PROJECTION)
        return bp
