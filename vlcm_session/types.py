"""Shared typing helpers used across the vlcm_session package.

This module centralizes JSON-like typings and the typed dictionaries for the
login payload and the persisted session, so other modules can import concrete
types rather than using unstructured Any.
"""
from __future__ import annotations

from typing import Dict, List, Union, TypedDict


# Recursive JSON-ish type used for payloads / returned JSON values
JSONType = Union[Dict[str, "JSONType"], List["JSONType"], str, int, float, bool, None]


class LoginPayload(TypedDict):
    username: str
    password: str


class SessionArtifacts(TypedDict):
    """Plain-dict form of a SessionContext, suitable for json.dump."""
    server_base_url: str
    token: str
    username: str
    certificates_validated: bool
    negotiated_ssl_protocol: str
