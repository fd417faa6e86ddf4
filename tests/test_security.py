from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from dating_app.core.config import settings
from dating_app.core.dependencies import get_identity
from dating_app.core.exceptions import Unauthenticated
from dating_app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_and_verify_password():
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_verify_password_with_garbage_hash():
    assert not verify_password("secret123", "not-a-bcrypt-hash")
    assert not verify_password("", hash_password("secret123"))


def test_token_carries_only_user_id():
    user_id = uuid4()
    token = create_access_token(user_id)

    payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    assert set(payload) == {"sub", "iat", "exp"}
    assert payload["exp"] - payload["iat"] == 5 * 60 * 60
    assert decode_access_token(token) == user_id


def test_decode_rejects_expired_token():
    token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))

    with pytest.raises(Unauthenticated, match="expired"):
        decode_access_token(token)


def test_decode_rejects_foreign_signature():
    token = jwt.encode({"sub": str(uuid4())}, "some-other-secret", algorithm="HS256")

    with pytest.raises(Unauthenticated):
        decode_access_token(token)


def test_decode_rejects_token_without_valid_subject():
    token = jwt.encode({"sub": "not-a-uuid"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    with pytest.raises(Unauthenticated):
        decode_access_token(token)


def test_get_identity_prefers_custom_header():
    user_id = uuid4()
    token = create_access_token(user_id)

    identity = get_identity(x_auth_token=token, authorization="Bearer garbage")

    assert identity.user_id == user_id


def test_get_identity_without_any_header():
    with pytest.raises(Unauthenticated):
        get_identity(x_auth_token=None, authorization=None)
