"""Session model returned by a successful login."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

from .exceptions import ConfigurationError, ProtocolError
from .helpers import mask_token
from .types import SessionArtifacts


@dataclass(frozen=True)
class SessionContext:
    """Authenticated handle for a vLCM appliance.

    Returned by connect() and passed explicitly to whatever code makes the
    follow-up API calls. Instances are immutable; a new login produces a new
    context.
    """
    server_base_url: str
    token: str
    username: str
    certificates_validated: bool = True
    negotiated_ssl_protocol: str = "Default"

    def __post_init__(self):
        if not isinstance(self.token, str) or not self.token:
            raise ProtocolError("Session token must be a non-empty string")

    def __repr__(self) -> str:
        return (
            f"SessionContext(server_base_url={self.server_base_url!r}, "
            f"token={mask_token(self.token)!r}, username={self.username!r}, "
            f"certificates_validated={self.certificates_validated!r}, "
            f"negotiated_ssl_protocol={self.negotiated_ssl_protocol!r})"
        )

    def authorization_header(self) -> Dict[str, str]:
        """Header carrying the bearer token for follow-up requests."""
        return {"Authorization": f"Bearer {self.token}"}

    def to_dict(self) -> SessionArtifacts:
        return {
            "server_base_url": self.server_base_url,
            "token": self.token,
            "username": self.username,
            "certificates_validated": self.certificates_validated,
            "negotiated_ssl_protocol": self.negotiated_ssl_protocol,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "SessionContext":
        """Restore a context saved with to_dict().

        Raises:
            ConfigurationError: If a required key is missing or a field has the wrong type
        """
        validated = data.get("certificates_validated", True)
        if not isinstance(validated, bool):
            raise ConfigurationError(
                f"Saved session field certificates_validated must be a bool, got {validated!r}"
            )
        try:
            return cls(
                server_base_url=data["server_base_url"],
                token=data["token"],
                username=data["username"],
                certificates_validated=validated,
                negotiated_ssl_protocol=data.get("negotiated_ssl_protocol", "Default"),
            )
        except KeyError as e:
            raise ConfigurationError(f"Saved session is missing key {e}") from e
