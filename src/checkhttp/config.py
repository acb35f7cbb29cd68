# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration for a single checkhttp probe."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .errors import ConfigurationError
from .version import __version__

DEFAULT_USER_AGENT = f"checkhttp/{__version__}"
DEFAULT_PATH = "/"
HTTP_PORT = 80
HTTPS_PORT = 443


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ProbeSettings:
    """Defaults applied when a flag is not given on the command line."""

    timeout: int = 10
    warning: float = 5.0
    critical: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    # Certificate verification is off unless explicitly requested.
    verify_tls: bool = False
    http2: bool = True

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            timeout=_int_env("CHECKHTTP_TIMEOUT", cls.timeout),
            warning=_float_env("CHECKHTTP_WARNING", cls.warning),
            critical=_float_env("CHECKHTTP_CRITICAL", cls.critical),
            user_agent=os.getenv("CHECKHTTP_USER_AGENT", cls.user_agent),
            verify_tls=_bool_env("CHECKHTTP_VERIFY_TLS", cls.verify_tls),
            http2=_bool_env("CHECKHTTP_HTTP2", cls.http2),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe defaults from environment."""
    return ProbeSettings.from_env()


def parse_expected_statuses(raw: str | None) -> tuple[str, ...]:
    """
    Split a comma separated status list.

    Entries are whitespace-stripped and blanks dropped, so "" and None both
    mean "no list" and the default range rule applies.
    """
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class TlsOptions:
    enabled: bool = False
    client_cert: str | None = None
    private_key: str | None = None
    verify: bool = False

    @property
    def has_client_cert(self) -> bool:
        return bool(self.client_cert and self.private_key)


@dataclass(frozen=True)
class JsonAssertion:
    """Expected value at a dot-separated key path of a JSON response body."""

    key_path: str
    expected: str


@dataclass(frozen=True)
class ProbeConfig:
    host: str = ""
    vhost: str | None = None
    port: int = 0
    path: str = DEFAULT_PATH
    method: str = "GET"
    user_agent: str = DEFAULT_USER_AGENT
    headers: dict[str, str] = field(default_factory=dict)
    timeout: int = 10
    tls: TlsOptions = field(default_factory=TlsOptions)
    expected_statuses: tuple[str, ...] = ()
    json_assertion: JsonAssertion | None = None
    warning: float = 5.0
    critical: float = 10.0
    http2: bool = True

    @classmethod
    def create(
        cls,
        *,
        host: str | None = None,
        vhost: str | None = None,
        json_key: str | None = None,
        json_value: str | None = None,
        expect: str | None = None,
        client_cert: str | None = None,
        private_key: str | None = None,
        ssl: bool = False,
        verify_tls: bool | None = None,
        settings: ProbeSettings | None = None,
        **overrides,
    ) -> ProbeConfig:
        """
        Assemble a validated config from flat, CLI-shaped inputs.

        The virtual host doubles as the target when no explicit host is given.
        Raises ConfigurationError for inputs that must not reach the network.
        """
        settings = settings or load_probe_settings()
        if bool(json_key) != bool(json_value):
            raise ConfigurationError("--json-key and --json-value must be given together")
        if bool(client_cert) != bool(private_key):
            raise ConfigurationError("--client-cert and --private-key must be given together")

        values = {
            "timeout": settings.timeout,
            "warning": settings.warning,
            "critical": settings.critical,
            "user_agent": settings.user_agent,
            "http2": settings.http2,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        if "method" in values:
            values["method"] = str(values["method"]).upper()

        config = cls(
            host=(host or vhost or "").strip(),
            vhost=vhost or None,
            tls=TlsOptions(
                enabled=ssl,
                client_cert=client_cert or None,
                private_key=private_key or None,
                verify=settings.verify_tls if verify_tls is None else verify_tls,
            ),
            expected_statuses=parse_expected_statuses(expect),
            json_assertion=JsonAssertion(json_key, json_value) if json_key else None,
            **values,
        )
        config.validate()
        return config

    @property
    def scheme(self) -> str:
        return "https" if self.tls.enabled else "http"

    @property
    def effective_port(self) -> int:
        if self.port:
            return self.port
        return HTTPS_PORT if self.tls.enabled else HTTP_PORT

    def validate(self) -> None:
        if not self.host:
            raise ConfigurationError("target host is required (-I/--ipaddr or -H/--vhost)")
        if not 0 <= self.port <= 65535:
            raise ConfigurationError(f"invalid port: {self.port}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")
        if self.warning < 0 or self.critical < 0:
            raise ConfigurationError("latency thresholds must not be negative")
        if not self.method:
            raise ConfigurationError("HTTP method must not be empty")


__all__ = [
    "DEFAULT_USER_AGENT",
    "JsonAssertion",
    "ProbeConfig",
    "ProbeSettings",
    "TlsOptions",
    "load_probe_settings",
    "parse_expected_statuses",
]
