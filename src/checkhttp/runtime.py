# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade wiring request building, transport and evaluation."""

from __future__ import annotations

import logging
from contextlib import suppress
from dataclasses import dataclass

from .config import ProbeConfig
from .errors import ConfigurationError
from .evaluation import evaluate
from .http.client import HttpClient, create_default_http_client
from .http.request_builder import build_request
from .models.probe import ProbeResult
from .models.verdict import Verdict

logger = logging.getLogger(__name__)


@dataclass
class ProbeOutcome:
    verdict: Verdict
    result: ProbeResult | None = None


class CheckHttp:
    """
    Run one probe against the configured endpoint.

    The HTTP client is created lazily so configuration problems (including
    unreadable client certificates) surface as UNKNOWN before any connection.
    """

    def __init__(self, config: ProbeConfig, http_client: HttpClient | None = None):
        self.config = config
        self.http_client = http_client

    def run(self) -> ProbeOutcome:
        try:
            self.config.validate()
            request = build_request(self.config)
            if self.http_client is None:
                self.http_client = create_default_http_client(self.config)
        except ConfigurationError as exc:
            logger.debug("configuration rejected: %s", exc)
            return ProbeOutcome(verdict=Verdict.unknown(str(exc)))

        logger.debug("%s %s", request.method, request.url)
        response = self.http_client.request(request)
        result = ProbeResult.from_response(response)
        if result.failed:
            logger.info("transport failure (%s): %s", result.error_category, result.error)
        else:
            logger.debug("response body:\n%s", result.text)

        return ProbeOutcome(verdict=evaluate(self.config, result), result=result)

    def close(self) -> None:
        with suppress(Exception):
            if self.http_client is not None and hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> CheckHttp:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def run_probe(config: ProbeConfig, http_client: HttpClient | None = None) -> ProbeOutcome:
    with CheckHttp(config, http_client=http_client) as probe:
        return probe.run()


__all__ = ["CheckHttp", "ProbeOutcome", "run_probe"]
