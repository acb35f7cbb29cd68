# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Turn a probe measurement into a Verdict.

Checks run in a fixed order: status code, JSON field, response time. Each
check can only raise the running severity. The response-time check is skipped
once an earlier check has failed.
"""

from __future__ import annotations

import logging

from ..config import JsonAssertion, ProbeConfig
from ..models.probe import ProbeResult
from ..models.verdict import Severity, Verdict
from . import jsonpath

logger = logging.getLogger(__name__)


def status_severity(status_code: int, expected: tuple[str, ...] | list[str]) -> Severity:
    if expected:
        return Severity.OK if str(status_code) in expected else Severity.WARNING
    if status_code >= 500:
        return Severity.CRITICAL
    if status_code >= 400:
        return Severity.WARNING
    return Severity.OK


def check_status(verdict: Verdict, status_code: int, expected: tuple[str, ...] | list[str]) -> None:
    severity = status_severity(status_code, expected)
    if severity is not Severity.OK:
        verdict.escalate(severity, f"Unexpected http status code: {status_code}")


def check_json(verdict: Verdict, body: bytes, assertion: JsonAssertion) -> None:
    if not jsonpath.matches(body, assertion.key_path, assertion.expected):
        verdict.escalate(Severity.CRITICAL, f"`{assertion.key_path}` is not `{assertion.expected}`")
    verdict.additional_output = jsonpath.pretty_print(body)


def check_latency(verdict: Verdict, elapsed: float, warning: float, critical: float) -> None:
    if elapsed > critical:
        verdict.escalate(
            Severity.CRITICAL,
            f"response time {elapsed:.3f}s exceeded critical threshold {critical:.3f}s",
        )
    elif elapsed > warning:
        verdict.escalate(
            Severity.WARNING,
            f"response time {elapsed:.3f}s exceeded warning threshold {warning:.3f}s",
        )


def evaluate(config: ProbeConfig, result: ProbeResult) -> Verdict:
    """Evaluate `result` against `config`. Pure; same inputs give the same Verdict."""
    if result.failed:
        return Verdict.critical(result.error or "request failed")

    verdict = Verdict()
    check_status(verdict, result.status_code, config.expected_statuses)

    assertion = config.json_assertion
    if assertion is not None and assertion.key_path and assertion.expected:
        check_json(verdict, result.body, assertion)

    if verdict.is_ok:
        check_latency(verdict, result.elapsed, config.warning, config.critical)

    logger.debug("verdict %s: %s", verdict.severity.name, verdict.message or "-")
    return verdict


__all__ = ["check_json", "check_latency", "check_status", "evaluate", "status_severity"]
