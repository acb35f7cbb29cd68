# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""TLS context construction for the probe transport."""

from __future__ import annotations

import logging
import ssl

from ..config import TlsOptions
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


def build_ssl_context(options: TlsOptions) -> ssl.SSLContext:
    """
    Return an SSLContext for the given options.

    Verification is skipped unless `options.verify` is set. A client
    certificate pair that cannot be loaded raises ConfigurationError so the
    probe stops before any connection is attempted.
    """
    context = ssl.create_default_context()
    if not options.verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        logger.debug("TLS certificate verification disabled")

    if options.client_cert or options.private_key:
        if not options.has_client_cert:
            raise ConfigurationError("client certificate and private key must be given together")
        try:
            context.load_cert_chain(certfile=options.client_cert, keyfile=options.private_key)
        except (OSError, ssl.SSLError) as exc:
            raise ConfigurationError(f"cannot load client certificate: {exc}") from exc
        logger.debug("loaded client certificate %s", options.client_cert)

    return context


__all__ = ["build_ssl_context"]
