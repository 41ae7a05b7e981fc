"""vLCM session client implementation.

This module provides the VlcmClient class that performs the login request
against a vLCM appliance, plus the connect_async() / connect() shortcuts
that return a SessionContext in one call.
"""
from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any, Optional

import aiohttp

from .credentials import CredentialInput, resolve_credentials
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    ProtocolError,
    TlsError,
)
from .helpers import build_base_url, login_url, mask_token
from .models import SessionContext
from .transport import TransportOptions, build_connector, build_timeout
from .types import JSONType, LoginPayload

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

log = logging.getLogger(__name__)


class VlcmClient:
    """Client for the vLCM login API.

    Each client owns one aiohttp session whose connector carries the SSL
    settings from its TransportOptions. Use it as an async context manager,
    or call close() when done.
    """

    def __init__(self, server: str, transport_options: Optional[TransportOptions] = None):
        """Initialize the client.

        Args:
            server: Host name or address of the appliance (optionally https://host)
            transport_options: Certificate, protocol and timeout settings

        Raises:
            ConfigurationError: If the server is empty or not HTTPS
        """
        self.base_url = build_base_url(server)
        self.transport_options = transport_options or TransportOptions()
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "VlcmClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _ensure_session(self) -> None:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=build_connector(self.transport_options),
                timeout=build_timeout(self.transport_options),
            )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def login(self, credentials: CredentialInput) -> SessionContext:
        """Authenticate and return a new SessionContext.

        Credentials are validated before any connection is opened. Every call
        issues a fresh login request; nothing is cached between calls.

        Raises:
            ConfigurationError: If the credential input is invalid
            NetworkError: If the appliance cannot be reached
            TlsError: If the TLS handshake fails
            AuthenticationError: If the appliance rejects the login
            ProtocolError: If the response carries no token
        """
        username, password = resolve_credentials(credentials)
        options = self.transport_options
        if options.ignore_cert_requirements:
            log.warning(
                f"Certificate validation disabled for {self.base_url}; "
                "the password is sent over an unauthenticated channel"
            )

        log.info(f"[1] Logging in to {self.base_url} as {username}...")
        payload: LoginPayload = {"username": username, "password": password}
        body = await self._make_api_request("POST", login_url(self.base_url), payload)

        log.info("[2] Reading session token...")
        token = self._extract_token(body)
        log.debug(f"Received token {mask_token(token)}")

        return SessionContext(
            server_base_url=self.base_url,
            token=token,
            username=username,
            certificates_validated=options.certificates_validated,
            negotiated_ssl_protocol=options.protocol_name,
        )

    @staticmethod
    def _extract_token(body: JSONType) -> str:
        if not isinstance(body, dict):
            raise ProtocolError(f"Expected a JSON object in the login response, got {type(body).__name__}")
        token = body.get("token")
        if not isinstance(token, str) or not token:
            raise ProtocolError("Login response does not contain a usable 'token' field")
        return token

    async def _make_api_request(self, method: str, url: str, payload: Any) -> JSONType:
        """Send one JSON request and return the decoded JSON body.

        Non-2xx responses raise AuthenticationError; transport failures are
        mapped to TlsError or NetworkError with the aiohttp error as cause.
        """
        await self._ensure_session()
        try:
            async with self._session.request(method, url, json=payload, headers=JSON_HEADERS) as resp:
                log.debug(f"{url} response - status: {resp.status}, content-type: {resp.content_type}")
                if not 200 <= resp.status < 300:
                    log.error(f"{url} rejected with HTTP {resp.status} {resp.reason}")
                    raise AuthenticationError(
                        f"Login to {self.base_url} failed: HTTP {resp.status} {resp.reason or ''}".rstrip(),
                        status=resp.status,
                    )
                try:
                    # appliance may send a non-JSON content-type, force the parse
                    return await resp.json(content_type=None)
                except ValueError as e:
                    raise ProtocolError(f"Login response from {self.base_url} is not valid JSON: {e}") from e
        except aiohttp.ClientSSLError as e:
            log.error(f"TLS handshake with {self.base_url} failed: {e}")
            raise TlsError(f"TLS handshake with {self.base_url} failed: {e}") from e
        except aiohttp.ClientConnectorError as e:
            # a peer refusing the pinned or offered protocol resets during the handshake
            if isinstance(e.os_error, (ssl.SSLError, ConnectionResetError)):
                log.error(f"TLS handshake with {self.base_url} failed: {e}")
                raise TlsError(f"TLS handshake with {self.base_url} failed: {e}") from e
            log.error(f"Cannot connect to {self.base_url}: {e}")
            raise NetworkError(f"Cannot connect to {self.base_url}: {e}") from e
        except asyncio.TimeoutError as e:
            log.error(f"Request to {url} timed out after {self.transport_options.timeout}s")
            raise NetworkError(
                f"Request to {url} timed out after {self.transport_options.timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            log.error(f"API request failed for {url}: {e}")
            raise NetworkError(f"API request failed for {url}: {e}") from e


async def connect_async(
    server: str,
    credentials: CredentialInput,
    transport_options: Optional[TransportOptions] = None,
) -> SessionContext:
    """Log in to a vLCM appliance and return the SessionContext.

    The client session used for the request is closed before returning.

    Example:
        session = await connect_async(
            "vlcm.example.com",
            UsernamePassword("admin@local", "secret"),
            TransportOptions(ignore_cert_requirements=True),
        )
    """
    async with VlcmClient(server, transport_options) as client:
        return await client.login(credentials)


def connect(
    server: str,
    credentials: CredentialInput,
    transport_options: Optional[TransportOptions] = None,
) -> SessionContext:
    """Blocking form of connect_async().

    Runs the login on a fresh event loop, so it cannot be called from code
    already running inside one.

    Raises:
        ConfigurationError: If called from a running event loop
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise ConfigurationError("connect() cannot run inside an event loop; await connect_async() instead")
    return asyncio.run(connect_async(server, credentials, transport_options))
