"""Password hashing, tokens and the user service."""

from __future__ import annotations

import jwt
import pytest

from potions.auth.passwords import hash_password, verify_password
from potions.auth.service import UserService
from potions.auth.tokens import TokenService
from potions.commons.daos.docdb_dao.in_memory_dao import InMemoryDAO
from potions.commons.exceptions import AuthenticationError, ConflictError, ValidationError


def test_password_hash_round_trip():
    hashed = hash_password("s3cret!")
    assert hashed != "s3cret!"
    assert hashed.startswith("$2")
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("s3cret!", "not-a-bcrypt-hash")
    assert not verify_password("", hashed)


def test_password_too_long_for_bcrypt():
    with pytest.raises(ValidationError):
        hash_password("x" * 73)


def test_token_issue_and_verify():
    tokens = TokenService(secret="k", ttl_seconds=60)
    token = tokens.issue({"id": "42", "username": "alice"})
    assert tokens.verify(token) == {"id": "42", "username": "alice"}


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_token_verify_rejects_missing_or_garbage(token):
    with pytest.raises(AuthenticationError):
        TokenService(secret="k").verify(token)


def test_token_verify_rejects_other_secret_and_expired():
    token = TokenService(secret="a").issue({"id": "1", "username": "u"})
    with pytest.raises(AuthenticationError):
        TokenService(secret="b").verify(token)

    expired = TokenService(secret="a", ttl_seconds=-10).issue({"id": "1", "username": "u"})
    with pytest.raises(AuthenticationError, match="expired"):
        TokenService(secret="a").verify(expired)


def test_token_without_principal_claims_is_rejected():
    token = jwt.encode({"sub": "x"}, "k", algorithm="HS256")
    with pytest.raises(AuthenticationError):
        TokenService(secret="k").verify(token)


def test_user_service_create_and_verify():
    dao = InMemoryDAO()
    users = UserService(dao=dao)

    created = users.create_user("alice", "password123")
    assert created._id is not None
    stored = dao.get_user("alice")
    assert stored["password_hash"] != "password123"
    assert "password" not in stored

    verified = users.verify("alice", "password123")
    assert verified.username == "alice"
    assert verified.principal() == {"id": str(created._id), "username": "alice"}

    with pytest.raises(AuthenticationError):
        users.verify("alice", "nope")
    with pytest.raises(AuthenticationError):
        users.verify("bob", "password123")
    with pytest.raises(ConflictError):
        users.create_user("alice", "another-password")
