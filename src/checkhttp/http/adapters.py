# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient for tests and dry runs."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Return pre-registered responses keyed by URL."""

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self.responses = dict(responses or {})
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self.responses[url] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        response = self.responses.get(request.url)
        if response is None:
            return HttpResponse(ok=False, url=request.url, error_message=f"no stubbed response for {request.url}")
        return response

    def close(self) -> None:
        self.closed = True
