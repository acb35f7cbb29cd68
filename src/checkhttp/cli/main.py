# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""checkhttp CLI."""

from __future__ import annotations

import argparse
import sys

from ..config import ProbeConfig, load_probe_settings
from ..errors import ConfigurationError
from ..log import setup_logging
from ..models.verdict import Severity, Verdict
from ..report import emit
from ..runtime import run_probe


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits UNKNOWN on usage errors instead of argparse's 2 (CRITICAL)."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(int(Severity.UNKNOWN), f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = PluginArgumentParser(prog="checkhttp", description="HTTP(S) health check in the monitoring-plugin format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose debug information on stderr")
    parser.add_argument("-H", "--vhost", help="Host header (also the target when --ipaddr is omitted)")
    parser.add_argument("-I", "--ipaddr", help="IP address or host name to connect to")
    parser.add_argument("-p", "--port", type=int, default=0, help="TCP port, 0 selects 80 or 443 (default: 0)")
    parser.add_argument("-w", "--warn", type=float, help="Warning response time in seconds (default: 5.0)")
    parser.add_argument("-c", "--crit", type=float, help="Critical response time in seconds (default: 10.0)")
    parser.add_argument("-t", "--timeout", type=int, help="Timeout in seconds (default: 10)")
    parser.add_argument("-u", "--uri", default="/", help="URI path (default: /)")
    parser.add_argument("-S", "--ssl", action="store_true", help="Enable TLS")
    parser.add_argument("-e", "--expect", default="", help="Expected status codes (comma separated)")
    parser.add_argument("--json-key", help="Dot-separated JSON key path to check")
    parser.add_argument("--json-value", help="Expected value at --json-key")
    parser.add_argument("-j", "--method", default="GET", help="HTTP method (GET, HEAD, POST, ...)")
    parser.add_argument("-A", "--useragent", help="User-Agent header")
    parser.add_argument("-J", "--client-cert", help="Client certificate file")
    parser.add_argument("-K", "--private-key", help="Client private key file")
    parser.add_argument(
        "--verify-tls",
        action="store_true",
        default=None,
        help="Verify the server certificate (skipped by default)",
    )
    parser.add_argument("--no-http2", dest="http2", action="store_false", default=None, help="Do not negotiate HTTP/2")
    return parser


def config_from_args(args: argparse.Namespace) -> ProbeConfig:
    return ProbeConfig.create(
        host=args.ipaddr,
        vhost=args.vhost,
        json_key=args.json_key,
        json_value=args.json_value,
        expect=args.expect,
        client_cert=args.client_cert,
        private_key=args.private_key,
        ssl=args.ssl,
        verify_tls=args.verify_tls,
        settings=load_probe_settings(),
        port=args.port,
        path=args.uri,
        method=args.method,
        user_agent=args.useragent,
        timeout=args.timeout,
        warning=args.warn,
        critical=args.crit,
        http2=args.http2,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        config = config_from_args(args)
    except ConfigurationError as exc:
        return emit(Verdict.unknown(str(exc)))

    outcome = run_probe(config)
    return emit(outcome.verdict, outcome.result)


if __name__ == "__main__":
    raise SystemExit(main())
