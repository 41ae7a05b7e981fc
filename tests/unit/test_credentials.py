"""Tests for credential variants and credential resolution."""
import pytest

from vlcm_session.credentials import (
    CredentialObject,
    SecretString,
    UsernamePassword,
    UsernameSecret,
    resolve_credentials,
    select_credentials,
)
from vlcm_session.exceptions import ConfigurationError


def test_secret_string_reveals_plaintext():
    secret = SecretString("s3cr3t!")
    assert secret.reveal() == "s3cr3t!"


def test_secret_string_never_shows_plaintext():
    secret = SecretString("s3cr3t!")
    assert "s3cr3t" not in repr(secret)
    assert "s3cr3t" not in str(secret)
    # plaintext is not kept as an attribute
    assert b"s3cr3t!" not in secret._ciphertext


def test_secret_string_rejects_empty():
    with pytest.raises(ConfigurationError):
        SecretString("")


def test_secret_string_from_prompt(monkeypatch):
    monkeypatch.setattr("vlcm_session.credentials.getpass.getpass", lambda prompt: "typed-in")
    assert SecretString.from_prompt().reveal() == "typed-in"


@pytest.mark.parametrize("credential", [
    UsernamePassword("admin@local", "pw"),
    UsernameSecret("admin@local", SecretString("pw")),
    CredentialObject("admin@local", SecretString("pw")),
    CredentialObject("admin@local", "pw"),
])
def test_each_variant_resolves_to_plain_pair(credential):
    assert resolve_credentials(credential) == ("admin@local", "pw")


def test_credential_object_wraps_plain_string():
    cred = CredentialObject("admin@local", "pw")
    assert isinstance(cred.secret, SecretString)


def test_username_password_repr_hides_password():
    assert "hunter2" not in repr(UsernamePassword("bob", "hunter2"))


def test_resolve_rejects_none():
    with pytest.raises(ConfigurationError, match="No credential"):
        resolve_credentials(None)


def test_resolve_rejects_more_than_one_variant():
    both = [UsernamePassword("a", "b"), CredentialObject("c", "d")]
    with pytest.raises(ConfigurationError, match="Exactly one"):
        resolve_credentials(both)


def test_resolve_rejects_empty_sequence():
    with pytest.raises(ConfigurationError):
        resolve_credentials([])


def test_resolve_accepts_single_item_sequence():
    assert resolve_credentials([UsernamePassword("a", "b")]) == ("a", "b")


def test_resolve_rejects_duck_typed_objects():
    class LooksLikeCredential:
        username = "a"
        password = "b"

        def resolve(self):
            return self.username, self.password

    with pytest.raises(ConfigurationError, match="Unsupported credential type"):
        resolve_credentials(LooksLikeCredential())


@pytest.mark.parametrize("username", ["", "   ", None])
def test_variants_require_username(username):
    with pytest.raises(ConfigurationError):
        UsernamePassword(username, "pw")


def test_username_secret_requires_secret_string():
    with pytest.raises(ConfigurationError):
        UsernameSecret("admin", "plain")


def test_select_username_password():
    cred = select_credentials(username="admin", password="pw")
    assert isinstance(cred, UsernamePassword)


def test_select_username_secret_wraps_string():
    cred = select_credentials(username="admin", secret="pw")
    assert isinstance(cred, UsernameSecret)
    assert cred.resolve() == ("admin", "pw")


def test_select_credential_object():
    obj = CredentialObject("admin", "pw")
    assert select_credentials(credential=obj) is obj


def test_select_rejects_password_with_credential_object():
    with pytest.raises(ConfigurationError, match="cannot be combined"):
        select_credentials(username="admin", password="pw", credential=CredentialObject("x", "y"))


def test_select_rejects_password_and_secret():
    with pytest.raises(ConfigurationError, match="not both"):
        select_credentials(username="admin", password="pw", secret=SecretString("pw"))


def test_select_rejects_nothing():
    with pytest.raises(ConfigurationError, match="No credential"):
        select_credentials()


def test_select_rejects_username_without_secret():
    with pytest.raises(ConfigurationError, match="No password or secret"):
        select_credentials(username="admin")
