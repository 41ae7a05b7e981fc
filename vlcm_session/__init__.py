"""vLCM Session Package.

This package logs in to a vLCM (virtualization lifecycle-management)
appliance and returns a SessionContext: the base URL, bearer token, user
name and transport settings that later API calls need. The context is a
plain immutable value owned by the caller; the package keeps no global
session and never changes process-wide SSL settings.

Example Usage:
    from vlcm_session import connect, UsernamePassword, TransportOptions

    session = connect(
        "vlcm.example.com",
        UsernamePassword("admin@local", "secret"),
        TransportOptions(ignore_cert_requirements=True, ssl_protocol="TLS1.2"),
    )
    headers = session.authorization_header()

    # Inside async code
    from vlcm_session import connect_async, UsernameSecret, SecretString

    session = await connect_async(
        "vlcm.example.com",
        UsernameSecret("admin@local", SecretString.from_prompt()),
    )
"""

from ._version import __version__, __version_info__
from .exceptions import (
    VlcmSessionError,
    ConfigurationError,
    NetworkError,
    TlsError,
    AuthenticationError,
    ProtocolError,
)
from .credentials import (
    Credential,
    CredentialObject,
    SecretString,
    UsernamePassword,
    UsernameSecret,
    resolve_credentials,
    select_credentials,
)
from .transport import SslProtocol, TransportOptions
from .models import SessionContext
from .client import VlcmClient, connect, connect_async

__all__ = [
    # Version
    "__version__",
    "__version_info__",
    # Exceptions
    "VlcmSessionError",
    "ConfigurationError",
    "NetworkError",
    "TlsError",
    "AuthenticationError",
    "ProtocolError",
    # Credentials
    "Credential",
    "CredentialObject",
    "SecretString",
    "UsernamePassword",
    "UsernameSecret",
    "resolve_credentials",
    "select_credentials",
    # Transport
    "SslProtocol",
    "TransportOptions",
    # Session
    "SessionContext",
    "VlcmClient",
    "connect",
    "connect_async",
]
