# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Severity and verdict models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Severity(IntEnum):
    """
    Monitoring-plugin states; the integer value is the process exit code.

    Only OK < WARNING < CRITICAL form the escalation order. UNKNOWN is reserved
    for failures detected before a request is sent.
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def escalatable(self) -> bool:
        return self is not Severity.UNKNOWN


@dataclass
class Verdict:
    severity: Severity = Severity.OK
    message: str = ""
    additional_output: str = ""

    @classmethod
    def unknown(cls, message: str) -> Verdict:
        return cls(severity=Severity.UNKNOWN, message=message)

    @classmethod
    def critical(cls, message: str) -> Verdict:
        return cls(severity=Severity.CRITICAL, message=message)

    @property
    def is_ok(self) -> bool:
        return self.severity is Severity.OK

    def escalate(self, severity: Severity, message: str) -> None:
        """
        Record a failed check.

        The severity never drops below its current value; the message always
        reflects the most recent failing check.
        """
        if not severity.escalatable or not self.severity.escalatable:
            raise ValueError("UNKNOWN is not part of the escalation order")
        if severity > self.severity:
            self.severity = severity
        self.message = message
