"""Transport security options for the login request.

The SSL context and connector built here belong to a single client session.
Nothing in this module touches process-wide SSL defaults, so concurrent
logins against different appliances can use different settings.
"""
from __future__ import annotations

import logging
import ssl
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import aiohttp

from .exceptions import ConfigurationError, TlsError

DEFAULT_PROTOCOL_NAME = "Default"
DEFAULT_TIMEOUT = 30.0

log = logging.getLogger(__name__)


class SslProtocol(str, Enum):
    """Protocol versions a login can be pinned to."""

    TLS1_0 = "TLS1.0"
    TLS1_1 = "TLS1.1"
    TLS1_2 = "TLS1.2"
    SSL = "SSL"

    @classmethod
    def parse(cls, value: Union["SslProtocol", str, None]) -> Optional["SslProtocol"]:
        """Parse a protocol name, case and punctuation insensitive.

        ``None`` and ``"Default"`` mean no pin. Accepts ``TLS1.2``, ``Tls12``,
        ``tls1_2``, ``Ssl3`` and similar spellings.

        Raises:
            ConfigurationError: If the name is not a known protocol
        """
        if value is None or isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ConfigurationError(f"Invalid SSL protocol {value!r}")
        key = value.strip().lower()
        for ch in ". _-":
            key = key.replace(ch, "")
        if key == "default":
            return None
        try:
            return _PROTOCOL_ALIASES[key]
        except KeyError:
            valid = ", ".join(p.value for p in cls)
            raise ConfigurationError(
                f"Invalid SSL protocol '{value}'. Must be one of: {valid}"
            ) from None


_PROTOCOL_ALIASES = {
    "tls": SslProtocol.TLS1_0,
    "tls1": SslProtocol.TLS1_0,
    "tls10": SslProtocol.TLS1_0,
    "tls11": SslProtocol.TLS1_1,
    "tls12": SslProtocol.TLS1_2,
    "ssl": SslProtocol.SSL,
    "ssl3": SslProtocol.SSL,
    "sslv3": SslProtocol.SSL,
    "legacyssl": SslProtocol.SSL,
}

# (TLSVersion, whether the local OpenSSL build provides it)
_TLS_VERSIONS = {
    SslProtocol.TLS1_0: (ssl.TLSVersion.TLSv1, ssl.HAS_TLSv1),
    SslProtocol.TLS1_1: (ssl.TLSVersion.TLSv1_1, ssl.HAS_TLSv1_1),
    SslProtocol.TLS1_2: (ssl.TLSVersion.TLSv1_2, ssl.HAS_TLSv1_2),
    SslProtocol.SSL: (ssl.TLSVersion.SSLv3, ssl.HAS_SSLv3),
}


@dataclass(frozen=True)
class TransportOptions:
    """Per-call transport settings.

    Args:
        ignore_cert_requirements: Skip certificate chain and hostname validation
        ssl_protocol: Pin the negotiated protocol; None uses the library default
        timeout: Total request timeout in seconds
    """
    ignore_cert_requirements: bool = False
    ssl_protocol: Optional[SslProtocol] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        object.__setattr__(self, "ssl_protocol", SslProtocol.parse(self.ssl_protocol))
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be a positive number of seconds, got {self.timeout!r}")

    @property
    def certificates_validated(self) -> bool:
        return not self.ignore_cert_requirements

    @property
    def protocol_name(self) -> str:
        if self.ssl_protocol is None:
            return DEFAULT_PROTOCOL_NAME
        return self.ssl_protocol.value


def build_ssl_context(options: TransportOptions) -> ssl.SSLContext:
    """Create a fresh SSL context reflecting the transport options.

    Raises:
        TlsError: If the pinned protocol cannot be configured locally
    """
    ctx = ssl.create_default_context()
    if options.ignore_cert_requirements:
        # check_hostname must be cleared before verify_mode can drop to CERT_NONE
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE

    if options.ssl_protocol is not None:
        version, available = _TLS_VERSIONS[options.ssl_protocol]
        if not available:
            raise TlsError(
                f"{options.ssl_protocol.value} is not supported by the local OpenSSL build"
            )
        try:
            if version < ssl.TLSVersion.TLSv1_2:
                # OpenSSL 3 refuses pre-1.2 handshakes above security level 0
                ctx.set_ciphers("DEFAULT:@SECLEVEL=0")
            ctx.minimum_version = version
            ctx.maximum_version = version
        except (ValueError, ssl.SSLError) as e:
            raise TlsError(f"Cannot pin protocol {options.ssl_protocol.value}: {e}") from e
        log.debug(f"Pinned SSL protocol to {options.ssl_protocol.value}")
    return ctx


def build_connector(options: TransportOptions) -> aiohttp.TCPConnector:
    """Create a connector owning its own SSL context. Must run inside an event loop."""
    return aiohttp.TCPConnector(ssl=build_ssl_context(options))


def build_timeout(options: TransportOptions) -> aiohttp.ClientTimeout:
    return aiohttp.ClientTimeout(total=options.timeout)
