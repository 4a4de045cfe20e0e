# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from . import models  # noqa: F401  (registers tables on Base.metadata)
from .session import Base, Database, build_engine

__all__ = ["Base", "Database", "build_engine"]
