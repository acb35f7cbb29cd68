# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Build the probe request descriptor from a ProbeConfig."""

from __future__ import annotations

from ..config import ProbeConfig
from ..errors import ConfigurationError
from .models import HttpRequest


def _format_host(host: str) -> str:
    # Bare IPv6 literals need brackets inside a URL authority.
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


def build_url(config: ProbeConfig) -> str:
    host = (config.host or "").strip()
    if not host:
        raise ConfigurationError("target host is required (-I/--ipaddr or -H/--vhost)")
    path = config.path or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{config.scheme}://{_format_host(host)}:{config.effective_port}{path}"


def build_headers(config: ProbeConfig) -> dict[str, str]:
    headers = dict(config.headers)
    headers["User-Agent"] = config.user_agent
    if config.vhost and config.vhost != config.host:
        headers["Host"] = config.vhost
    return headers


def build_request(config: ProbeConfig) -> HttpRequest:
    """Return the request descriptor; no I/O is performed."""
    return HttpRequest(
        url=build_url(config),
        method=config.method,
        headers=build_headers(config),
        body=None,
        timeout=float(config.timeout),
        allow_redirects=False,
    )


__all__ = ["build_headers", "build_request", "build_url"]
