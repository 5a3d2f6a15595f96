# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .session import MAX_ROW_ID, Base, Database, build_engine, is_storable_id

__all__ = ["MAX_ROW_ID", "Base", "Database", "build_engine", "is_storable_id"]
