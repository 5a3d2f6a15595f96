# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from carpricing.domain.reports.entities import Report
from carpricing.domain.reports.exceptions import ReportNotFoundError
from carpricing.domain.reports.repositories import ReportRepository
from carpricing.shared.logging import logger


class ChangeApprovalUseCase:
    def __init__(self, *, reports: ReportRepository) -> None:
        self._reports = reports

    def execute(self, report_id: int, approved: bool) -> Report:
        report = self._reports.find_by_id(report_id)
        if report is None:
            raise ReportNotFoundError(context={"report_id": report_id})
        updated = self._reports.update(report.with_approval(approved))
        logger.info(f"reports.approval: report_id={report_id} approved={approved}")
        return updated
