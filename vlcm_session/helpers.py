"""Helper functions for the vlcm_session package.

This module contains small string utilities shared by the client, the
session model and the CLI: server normalization and token masking.
"""

from .exceptions import ConfigurationError

LOGIN_ENDPOINT = "/lcm/api/v1/login"


def build_base_url(server: str) -> str:
    """Build the appliance base URL from a host name or address.

    Surrounding whitespace, an explicit ``https://`` scheme and trailing
    slashes are removed before the scheme is re-applied, so both
    ``vlcm.example.com`` and ``https://vlcm.example.com/`` give the same URL.

    Args:
        server: Host name or address, optionally with a port

    Returns:
        Base URL of the form ``https://{server}``

    Raises:
        ConfigurationError: If the server is empty or uses plain HTTP

    Example:
        >>> build_base_url("vlcm.example.com")
        'https://vlcm.example.com'
    """
    if server is None:
        raise ConfigurationError("Server is required")
    host = server.strip()
    if host.lower().startswith("http://"):
        raise ConfigurationError("HTTPS is required; refusing plain http:// server")
    if host.lower().startswith("https://"):
        host = host[len("https://"):]
    host = host.rstrip("/")
    if not host:
        raise ConfigurationError("Server must be a non-empty host name or address")
    return f"https://{host}"


def login_url(base_url: str) -> str:
    """Return the login endpoint URL for a base URL.

    Example:
        >>> login_url("https://vlcm.example.com")
        'https://vlcm.example.com/lcm/api/v1/login'
    """
    return base_url.rstrip("/") + LOGIN_ENDPOINT


def mask_token(token: str, visible: int = 6) -> str:
    """Mask a bearer token for logs and console output.

    Args:
        token: Token to mask
        visible: Number of leading characters to keep (default: 6)

    Returns:
        Masked token

    Example:
        >>> mask_token("abcdefghijkl")
        'abcdef******'
    """
    if not token:
        return ""
    if len(token) <= visible:
        return "*" * len(token)
    return token[:visible] + "*" * (len(token) - visible)
