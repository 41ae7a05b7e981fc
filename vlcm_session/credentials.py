"""Credential inputs for the vLCM login.

A login takes exactly one of three credential variants:

- ``UsernamePassword``: a username and a plaintext password
- ``UsernameSecret``: a username and a ``SecretString``
- ``CredentialObject``: a combined identity and secret

Each variant knows how to resolve itself into the ``(username, password)``
pair sent in the login body. Resolution is local and never touches the
network.
"""
from __future__ import annotations

import getpass
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .exceptions import ConfigurationError

AES_GCM_IV_SIZE_BYTES = 12


class SecretString:
    """A secret held AES-GCM encrypted in memory.

    The plaintext is only materialized by reveal(), so the secret does not
    show up in reprs, tracebacks or logged objects. The key is random per
    instance and never leaves the process.
    """

    __slots__ = ("_key", "_nonce", "_ciphertext")

    def __init__(self, value: str):
        if not value:
            raise ConfigurationError("Secret must not be empty")
        self._key = AESGCM.generate_key(bit_length=256)
        self._nonce = os.urandom(AES_GCM_IV_SIZE_BYTES)
        self._ciphertext = AESGCM(self._key).encrypt(self._nonce, value.encode("utf-8"), None)

    @classmethod
    def from_prompt(cls, prompt: str = "Password: ") -> "SecretString":
        """Read a secret from the terminal without echo."""
        return cls(getpass.getpass(prompt))

    def reveal(self) -> str:
        return AESGCM(self._key).decrypt(self._nonce, self._ciphertext, None).decode("utf-8")

    def __repr__(self) -> str:
        return "SecretString('********')"

    __str__ = __repr__


class Credential(ABC):
    """Base class for the credential variants."""

    @abstractmethod
    def resolve(self) -> Tuple[str, str]:
        """Return the plaintext (username, password) pair."""


def _require_username(username: str) -> None:
    if not isinstance(username, str) or not username.strip():
        raise ConfigurationError("Username must be a non-empty string")


@dataclass(frozen=True)
class UsernamePassword(Credential):
    username: str
    password: str = field(repr=False)

    def __post_init__(self):
        _require_username(self.username)
        if not isinstance(self.password, str) or not self.password:
            raise ConfigurationError("Password must be a non-empty string")

    def resolve(self) -> Tuple[str, str]:
        return self.username, self.password


@dataclass(frozen=True)
class UsernameSecret(Credential):
    username: str
    secret: SecretString

    def __post_init__(self):
        _require_username(self.username)
        if not isinstance(self.secret, SecretString):
            raise ConfigurationError("UsernameSecret requires a SecretString secret")

    def resolve(self) -> Tuple[str, str]:
        return self.username, self.secret.reveal()


@dataclass(frozen=True)
class CredentialObject(Credential):
    """A combined identity and secret, e.g. loaded from a credential store.

    A plain string secret is wrapped into a SecretString on construction.
    """
    username: str
    secret: SecretString

    def __post_init__(self):
        _require_username(self.username)
        if isinstance(self.secret, str):
            object.__setattr__(self, "secret", SecretString(self.secret))
        elif not isinstance(self.secret, SecretString):
            raise ConfigurationError("CredentialObject secret must be a str or SecretString")

    def resolve(self) -> Tuple[str, str]:
        return self.username, self.secret.reveal()


CredentialInput = Union[Credential, Sequence[Credential], None]


def resolve_credentials(credentials: CredentialInput) -> Tuple[str, str]:
    """Resolve exactly one credential variant into (username, password).

    Args:
        credentials: A single credential, or a sequence that must hold exactly one

    Returns:
        Plaintext (username, password) pair for the login body

    Raises:
        ConfigurationError: If zero or more than one credential is supplied,
            or the value is not a credential variant
    """
    if credentials is None:
        raise ConfigurationError("No credential supplied; pass exactly one credential variant")
    if isinstance(credentials, (list, tuple)):
        if len(credentials) != 1:
            raise ConfigurationError(
                f"Exactly one credential variant is required, got {len(credentials)}"
            )
        credentials = credentials[0]
    if not isinstance(credentials, Credential):
        raise ConfigurationError(
            f"Unsupported credential type {type(credentials).__name__}; use "
            "UsernamePassword, UsernameSecret or CredentialObject"
        )
    return credentials.resolve()


def select_credentials(
    username: Optional[str] = None,
    password: Optional[str] = None,
    secret: Optional[Union[SecretString, str]] = None,
    credential: Optional[CredentialObject] = None,
) -> Credential:
    """Map the flat login parameters onto exactly one credential variant.

    Accepted combinations are ``username + password``, ``username + secret``
    or ``credential`` alone.

    Raises:
        ConfigurationError: For any other combination
    """
    if credential is not None:
        if username is not None or password is not None or secret is not None:
            raise ConfigurationError(
                "A credential object cannot be combined with username, password or secret"
            )
        if not isinstance(credential, CredentialObject):
            raise ConfigurationError("credential must be a CredentialObject")
        return credential

    if password is not None and secret is not None:
        raise ConfigurationError("Supply either a password or a secret, not both")
    if username is None:
        raise ConfigurationError(
            "No credential supplied; pass username with password or secret, or a credential object"
        )
    if password is not None:
        return UsernamePassword(username, password)
    if secret is not None:
        if isinstance(secret, str):
            secret = SecretString(secret)
        return UsernameSecret(username, secret)
    raise ConfigurationError(f"No password or secret supplied for user '{username}'")
