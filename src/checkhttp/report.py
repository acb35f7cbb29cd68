# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Render a Verdict in the monitoring-plugin output format."""

from __future__ import annotations

import sys
from typing import TextIO

from .models.probe import ProbeResult
from .models.verdict import Verdict


def summary_line(verdict: Verdict, result: ProbeResult) -> str:
    size = result.size
    elapsed = result.elapsed
    return (
        f"HTTP {verdict.severity.name}: {result.protocol} {result.status_line} - "
        f"{size} bytes in {elapsed:.3f} second response time "
        f"|time={elapsed:.6f}s;;; size={size}B;;;0"
    )


def format_report(verdict: Verdict, result: ProbeResult | None = None) -> str:
    """
    Return the full plugin output, newline-terminated.

    Without a response (configuration or transport failure) the short form
    `HTTP <STATE> - <message>` is used instead of the measured summary.
    """
    if result is None or result.failed or result.status_code is None:
        return f"HTTP {verdict.severity.name} - {verdict.message}\n"

    lines = [summary_line(verdict, result)]
    if verdict.message:
        lines.append(verdict.message)
    out = "\n".join(lines) + "\n"
    if verdict.additional_output:
        out += "\n" + verdict.additional_output
        if not out.endswith("\n"):
            out += "\n"
    return out


def exit_code(verdict: Verdict) -> int:
    return int(verdict.severity)


def emit(verdict: Verdict, result: ProbeResult | None = None, stream: TextIO | None = None) -> int:
    """Write the report and return the matching exit code."""
    out = stream or sys.stdout
    out.write(format_report(verdict, result))
    out.flush()
    return exit_code(verdict)


__all__ = ["emit", "exit_code", "format_report", "summary_line"]
