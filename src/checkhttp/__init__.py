# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
checkhttp package entrypoint.

A single-shot HTTP(S) health check for monitoring systems. One request is
sent, the response is evaluated against status-code, JSON-field and
response-time rules, and the result is reported in the monitoring-plugin
format (one summary line, exit code 0/1/2/3). HTTP behavior is abstracted
behind an injectable client interface.
"""

from .config import JsonAssertion, ProbeConfig, ProbeSettings, TlsOptions, load_probe_settings
from .errors import CheckHttpError, ConfigurationError, TransportError
from .evaluation import evaluate
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    build_request,
    create_default_http_client,
)
from .log import setup_logging
from .models import ProbeResult, Severity, Verdict
from .report import format_report
from .runtime import CheckHttp, ProbeOutcome, run_probe
from .version import __version__

__all__ = [
    "CheckHttp",
    "CheckHttpError",
    "ConfigurationError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "JsonAssertion",
    "ProbeConfig",
    "ProbeOutcome",
    "ProbeResult",
    "ProbeSettings",
    "Severity",
    "TlsOptions",
    "TransportError",
    "Verdict",
    "build_request",
    "create_default_http_client",
    "evaluate",
    "format_report",
    "load_probe_settings",
    "run_probe",
    "setup_logging",
    "__version__",
]
