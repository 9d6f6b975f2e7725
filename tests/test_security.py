# tests/test_security.py

from datetime import timedelta

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from tracker.config.settings import resolve_database_url
from tracker.exceptions import Unauthenticated
from tracker.utils.auth import parse_bearer
from tracker.utils.security import (
    ADMIN_REALM,
    USER_REALM,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_verifies_and_is_not_the_password():
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_token_carries_subject_and_realm():
    token = create_access_token(42, realm=USER_REALM)
    assert decode_access_token(token, realm=USER_REALM) == 42


def test_token_from_other_realm_is_rejected():
    token = create_access_token(42, realm=ADMIN_REALM)
    with pytest.raises(Unauthenticated):
        decode_access_token(token, realm=USER_REALM)


def test_expired_token_is_rejected():
    token = create_access_token(42, expires_delta=timedelta(seconds=-5))
    with pytest.raises(Unauthenticated):
        decode_access_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(Unauthenticated):
        decode_access_token("not.a.jwt")


def bearer(scheme, token):
    return HTTPAuthorizationCredentials(scheme=scheme, credentials=token)


@pytest.mark.parametrize(
    "credentials, header_present, message",
    [
        (None, False, "missing authorization header"),
        (None, True, "invalid authorization format"),
        (bearer("bearer", "abc"), True, "invalid authorization format"),
        (bearer("Bearer", "a b"), True, "invalid authorization format"),
        (bearer("Bearer", " abc"), True, "invalid authorization format"),
    ],
)
def test_parse_bearer_rejects_bad_credentials(credentials, header_present, message):
    with pytest.raises(Unauthenticated) as exc_info:
        parse_bearer(credentials, header_present=header_present)
    assert exc_info.value.message == message


def test_parse_bearer_returns_token():
    assert parse_bearer(bearer("Bearer", "abc.def"), header_present=True) == "abc.def"


@pytest.mark.parametrize(
    "database_url, mysql_url, expected",
    [
        (None, None, "sqlite:///./tracker.db"),
        ("postgres://u:p@host/db", None, "postgresql://u:p@host/db"),
        ("postgresql://u:p@host/db", None, "postgresql://u:p@host/db"),
        ("postgres://u:p@host/db", "mysql://u:p@host/db", "mysql+pymysql://u:p@host/db"),
        ("mysql://u:p@host/db", None, "mysql+pymysql://u:p@host/db"),
        ("something-else", None, "sqlite:///./tracker.db"),
    ],
)
def test_resolve_database_url(database_url, mysql_url, expected):
    assert resolve_database_url(database_url, mysql_url) == expected
