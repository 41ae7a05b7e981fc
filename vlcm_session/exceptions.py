"""Exception classes for the vlcm_session package.

Every error raised while establishing a session derives from
VlcmSessionError, so callers can catch the whole family in one place.
"""
from typing import Optional


class VlcmSessionError(Exception):
    """Base exception for all vlcm_session errors.

    Catching this exception will catch all vlcm_session-specific errors.
    """
    pass


class ConfigurationError(VlcmSessionError):
    """Raised when the caller's input is invalid before any request is made.

    This can occur due to:
    - No credential, or more than one credential variant supplied
    - An unknown SSL/TLS protocol name
    - An empty server name or a non-HTTPS server URL
    - A non-positive timeout
    """
    pass


class NetworkError(VlcmSessionError):
    """Raised when the appliance cannot be reached.

    This can occur due to:
    - Connection refused or reset
    - DNS resolution failure
    - Request timeout
    """
    pass


class TlsError(VlcmSessionError):
    """Raised when the TLS layer rejects the connection.

    This can occur due to:
    - Certificate validation failure (self-signed, expired, wrong host)
    - Protocol version negotiation failure
    - A pinned protocol that the local OpenSSL build does not provide
    """
    pass


class AuthenticationError(VlcmSessionError):
    """Raised when the appliance answers the login request with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ProtocolError(VlcmSessionError):
    """Raised when a successful login response carries no usable token."""
    pass
