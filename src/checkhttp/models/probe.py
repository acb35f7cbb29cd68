# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe measurement model."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ErrorCategory
from ..http.models import HttpResponse


@dataclass
class ProbeResult:
    """
    Outcome of one request/response cycle.

    Either the response fields are populated, or `error` carries the transport
    failure text; never both.
    """

    status_code: int | None = None
    protocol: str = ""
    status_line: str = ""
    body: bytes = b""
    elapsed: float = 0.0
    error: str | None = None
    error_category: ErrorCategory | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def size(self) -> int:
        return len(self.body)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @classmethod
    def from_response(cls, response: HttpResponse) -> ProbeResult:
        if not response.ok:
            return cls(
                error=response.error_message or response.error_type or "request failed",
                error_category=response.error_category,
                elapsed=response.elapsed,
            )
        return cls(
            status_code=response.status_code,
            protocol=response.http_version,
            status_line=response.status_line,
            body=response.content,
            elapsed=response.elapsed,
        )
