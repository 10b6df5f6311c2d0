from __future__ import annotations

from todo_backend.infrastructure.security.password_hasher import PasswordHasher


def test_hash_is_salted_and_verifies():
    hasher = PasswordHasher()

    first = hasher.hash("pw1")
    second = hasher.hash("pw1")

    assert first != second
    assert hasher.verify("pw1", first)
    assert hasher.verify("pw1", second)


def test_wrong_password_does_not_verify():
    hasher = PasswordHasher()

    assert not hasher.verify("wrong", hasher.hash("pw1"))


def test_unparseable_digest_does_not_verify():
    hasher = PasswordHasher()

    assert hasher.verify("pw1", "not-a-hash") is False
    assert hasher.verify("pw1", "") is False
    assert hasher.verify_and_update("pw1", "not-a-hash") == (False, None)


def test_current_scheme_needs_no_replacement():
    hasher = PasswordHasher()

    verified, replacement = hasher.verify_and_update("pw1", hasher.hash("pw1"))

    assert verified is True
    assert replacement is None
