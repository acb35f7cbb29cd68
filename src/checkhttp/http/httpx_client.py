# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import time

import httpx

from ..config import ProbeConfig
from ..errors import ErrorCategory, TransportError, categorize_exception, describe_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse
from .tls import build_ssl_context

logger = logging.getLogger(__name__)


def _check_deadline(deadline: float, timeout: float, stage: str) -> None:
    # httpx timeouts are per operation; this bounds the exchange as a whole.
    if time.monotonic() > deadline:
        raise TransportError(f"timed out after {timeout:g}s {stage}", ErrorCategory.TIMEOUT)


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper that times each exchange."""

    def __init__(self, client: httpx.Client, *, timeout: float = 10.0):
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_config(cls, config: ProbeConfig) -> HttpxClient:
        """Build the transport; raises ConfigurationError for unusable TLS material."""
        verify = build_ssl_context(config.tls)
        client = httpx.Client(
            follow_redirects=False,
            timeout=float(config.timeout),
            verify=verify,
            http2=config.http2 and config.tls.enabled,
        )
        return cls(client, timeout=float(config.timeout))

    def request(self, request: HttpRequest) -> HttpResponse:
        timeout = request.timeout if request.timeout is not None else self.timeout
        started = time.monotonic()
        deadline = started + timeout

        try:
            with self._client.stream(
                request.method,
                request.url,
                headers=request.headers or {},
                content=request.body,
                timeout=httpx.Timeout(timeout),
                follow_redirects=request.allow_redirects,
            ) as resp:
                _check_deadline(deadline, timeout, "waiting for response headers")
                content = bytearray()
                for chunk in resp.iter_bytes():
                    _check_deadline(deadline, timeout, "reading response body")
                    content.extend(chunk)
            elapsed = time.monotonic() - started
            if elapsed > timeout:
                raise TransportError(f"timed out after {timeout:g}s reading response body", ErrorCategory.TIMEOUT)
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            logger.debug("request to %s failed (%s): %r", request.url, category.value, exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                elapsed=time.monotonic() - started,
                error_message=describe_exception(exc),
                error_type=type(exc).__name__,
                error_category=category,
            )

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            reason_phrase=resp.reason_phrase,
            http_version=resp.http_version,
            headers=dict(resp.headers),
            content=bytes(content),
            url=str(resp.url),
            elapsed=elapsed,
        )

    def close(self) -> None:
        self._client.close()
