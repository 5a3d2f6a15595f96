# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from carpricing.shared.errors.base import NotFoundError


class ReportNotFoundError(NotFoundError):
    code = "report_not_found"
    message = "Report not found"
