# tests/unit/test_security.py
from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from idcard_api.core.config import Settings
from idcard_api.core.exceptions import ErrorCode, ServiceError
from idcard_api.core.security import (
    authorize,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from idcard_api.core.tenancy import Role


@pytest.fixture
def settings():
    return Settings(jwt_secret_key="unit-secret", bcrypt_rounds=4)


def test_password_hash_roundtrip():
    hashed = hash_password("hunter22", rounds=4)
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)


def test_verify_password_never_raises_on_garbage_hash():
    assert verify_password("whatever", "not-a-bcrypt-hash") is False
    assert verify_password("", "") is False


def test_token_carries_role_and_school(settings):
    user_id, school_id = uuid4(), uuid4()
    token = create_access_token(user_id, "Schooladmin", school_id, settings)

    principal = decode_access_token(token, settings)
    assert principal.user_id == user_id
    assert principal.role is Role.SCHOOLADMIN
    assert principal.school_id == school_id


def test_superadmin_token_has_no_school(settings):
    principal = decode_access_token(create_access_token(uuid4(), "Superadmin", None, settings), settings)
    assert principal.is_superadmin
    assert principal.school_id is None


def test_missing_secret_is_configuration_error():
    with pytest.raises(ServiceError) as exc:
        create_access_token(uuid4(), "Teacher", uuid4(), Settings(jwt_secret_key=""))
    assert exc.value.code is ErrorCode.CONFIGURATION_ERROR
    assert exc.value.status_code == 500


def test_expired_token_rejected(settings):
    token = create_access_token(uuid4(), "Teacher", uuid4(), settings, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ServiceError) as exc:
        decode_access_token(token, settings)
    assert exc.value.code is ErrorCode.UNAUTHENTICATED
    assert exc.value.message == "Token expired"


def test_token_signed_with_other_secret_rejected(settings):
    forged = jwt.encode({"sub": str(uuid4()), "role": "Superadmin", "exp": 9999999999}, "other", algorithm="HS256")
    with pytest.raises(ServiceError) as exc:
        decode_access_token(forged, settings)
    assert exc.value.message == "Invalid token"


def test_authorize_checks_presence_and_role(settings):
    with pytest.raises(ServiceError) as exc:
        authorize(None, [Role.SUPERADMIN], settings)
    assert exc.value.code is ErrorCode.UNAUTHENTICATED

    token = create_access_token(uuid4(), "Teacher", uuid4(), settings)
    with pytest.raises(ServiceError) as exc:
        authorize(token, [Role.SUPERADMIN, Role.SCHOOLADMIN], settings)
    assert exc.value.code is ErrorCode.FORBIDDEN
    assert exc.value.status_code == 403

    assert authorize(token, [Role.TEACHER], settings).role is Role.TEACHER
