# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Dot-separated key-path lookup over decoded JSON.

Each path segment is an object field name. Arrays are never indexed: a path
that reaches a list (or any scalar) before its last segment is a lookup
failure, as is a missing field or a body that is not valid JSON.

Comparison rendering rule for the value found at the end of the path:
- strings compare as-is
- true/false/null render as their JSON literals
- numbers render as JSON does (`1`, `1.5`, `-3e-07`)
- objects and arrays never match any expected value
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

MISSING = object()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_body(body: bytes | str) -> Any:
    """Decode a JSON body, returning MISSING when it is not valid JSON."""
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (ValueError, TypeError):
        return MISSING


def lookup(document: Any, segments: Sequence[str]) -> Any:
    current = document
    for segment in segments:
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def render_scalar(value: Any) -> str | None:
    """Render a JSON scalar for comparison; None for anything not comparable."""
    if value is MISSING or isinstance(value, (dict, list)):
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value)


def matches(body: bytes | str, key_path: str, expected: str) -> bool:
    document = decode_body(body)
    if document is MISSING:
        return False
    return render_scalar(lookup(document, key_path.split("."))) == expected


def _reindent(text: str, indent: str = "    ") -> str:
    # Input must already be valid JSON; only whitespace outside strings changes.
    out: list[str] = []
    depth = 0
    pending_newline = False
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c in " \t\r\n":
            i += 1
            continue
        if pending_newline and c not in "}]":
            out.append("\n" + indent * depth)
        if c == '"':
            j = i + 1
            while text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            out.append(text[i : j + 1])
            pending_newline = False
            i = j + 1
            continue
        if c in "{[":
            depth += 1
            out.append(c)
            pending_newline = True
            i += 1
            continue
        if c in "}]":
            depth -= 1
            # empty containers stay as {} / []
            if not pending_newline:
                out.append("\n" + indent * depth)
            out.append(c)
        elif c == ",":
            out.append(",\n" + indent * depth)
        elif c == ":":
            out.append(": ")
        else:
            out.append(c)
        pending_newline = False
        i += 1
    return "".join(out)


def pretty_print(body: bytes | str) -> str:
    """
    Indent a JSON body by 4 spaces without touching its tokens.

    Numbers keep their original spelling and duplicate keys are kept.
    Bodies that are not valid JSON are returned as text.
    """
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if decode_body(text) is MISSING:
        return text
    return _reindent(text)


__all__ = ["MISSING", "decode_body", "lookup", "matches", "pretty_print", "render_scalar"]
