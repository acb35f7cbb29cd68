# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models consumed by HttpClient implementations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request descriptor produced by the request builder."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool = False


@dataclass
class HttpResponse:
    """Normalized HTTP response; `elapsed` spans request start to end of body."""

    ok: bool
    status_code: int | None = None
    reason_phrase: str = ""
    http_version: str = "HTTP/1.1"
    headers: Headers = field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
    elapsed: float = 0.0
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def status_line(self) -> str:
        if self.status_code is None:
            return ""
        return f"{self.status_code} {self.reason_phrase}".rstrip()

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")
