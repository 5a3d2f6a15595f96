# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint

from carpricing.application.services.access import AuthenticatedGuard, PrivilegedGuard
from carpricing.application.use_cases.reports.change_approval import ChangeApprovalUseCase
from carpricing.application.use_cases.reports.create_report import (
    CreateReportInput,
    CreateReportUseCase,
)
from carpricing.application.use_cases.reports.estimate_price import EstimatePriceUseCase
from carpricing.domain.reports.entities import EstimateQuery
from carpricing.interfaces.http.dto.envelope import ApiResponse
from carpricing.interfaces.http.dto.reports import (
    ApproveReportRequestDTO,
    CreateReportRequestDTO,
    EstimateDTO,
    EstimateQueryDTO,
    ReportDTO,
)
from carpricing.interfaces.http.pipeline import RequestContext, RequestPipeline
from carpricing.interfaces.http.projection import FieldProjector
from carpricing.interfaces.http.request_parsing import parse_body, parse_query

REPORT_PROJECTION = FieldProjector(ReportDTO)
ESTIMATE_PROJECTION = FieldProjector(EstimateDTO)


class ReportsController:
    def __init__(
        self,
        *,
        pipeline: RequestPipeline,
        create_use_case: CreateReportUseCase,
        approval_use_case: ChangeApprovalUseCase,
        estimate_use_case: EstimatePriceUseCase,
    ) -> None:
        self._pipeline = pipeline
        self._create_use_case = create_use_case
        self._approval_use_case = approval_use_case
        self._estimate_use_case = estimate_use_case

    def create_report(self, ctx: RequestContext) -> ApiResponse:
        dto = parse_body(CreateReportRequestDTO)
        report = self._create_use_case.execute(
            ctx.require_user(),
            CreateReportInput(**dto.model_dump()),
        )
        return ApiResponse.ok(
            "createReport",
            f"Report with id {report.id} has been created successfully",
            report,
            affected_rows=1,
        )

    def change_approval(self, ctx: RequestContext, report_id: int) -> ApiResponse:
        dto = parse_body(ApproveReportRequestDTO)
        report = self._approval_use_case.execute(report_id, dto.approved)
        state = "approved" if report.approved else "unapproved"
        return ApiResponse.ok(
            "changeApproval",
            f"Report with id {report_id} has been {state}",
            report,
            affected_rows=1,
        )

    def estimate(self, ctx: RequestContext) -> ApiResponse:
        dto = parse_query(EstimateQueryDTO)
        price = self._estimate_use_case.execute(EstimateQuery(**dto.model_dump()))
        message = (
            "No comparable reports found" if price is None else "Estimate has been calculated"
        )
        return ApiResponse.ok("getEstimate", message, {"price": price})

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("reports", __name__, url_prefix="/api/reports")
        view = self._pipeline.view

        bp.add_url_rule(
            "",
            endpoint="createReport",
            view_func=view(
                "createReport",
                self.create_report,
                guards=[AuthenticatedGuard()],
                projector=REPORT_PROJECTION,
                status=HTTPStatus.CREATED,
            ),
            methods=["POST"],
        )
        bp.add_url_rule(
            "/<int:report_id>",
            endpoint="changeApproval",
            view_func=view(
                "changeApproval",
                self.change_approval,
                guards=[PrivilegedGuard()],
                projector=REPORT_PROJECTION,
            ),
            methods=["PATCH"],
        )
        bp.add_url_rule(
            "/estimate",
            endpoint="getEstimate",
            view_func=view("getEstimate", self.estimate, projector=ESTIMATE_PROJECTION),
            methods=["GET"],
        )
        return bp
