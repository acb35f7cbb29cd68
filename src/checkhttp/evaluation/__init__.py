# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response evaluation."""

from .evaluator import evaluate, status_severity

__all__ = ["evaluate", "status_severity"]
