# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication and user-management HTTP service."""

__version__ = "1.0.0"
