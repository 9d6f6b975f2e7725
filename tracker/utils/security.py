# tracker/utils/security.py
"""Password hashing and access tokens.

Both are treated as opaque capabilities by the rest of the package: bcrypt
for hashing, a signed JWT (python-jose) carrying the subject id.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from tracker.config.settings import settings
from tracker.exceptions import Unauthenticated

USER_REALM = "user"
ADMIN_REALM = "admin"

# bcrypt only looks at the first 72 bytes of the password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_salt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(subject_id: int, realm: str = USER_REALM, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.access_token_expire_days))
    to_encode = {"sub": str(subject_id), "realm": realm, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, realm: str = USER_REALM) -> int:
    """Verify the token and return the subject id it was issued for"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise Unauthenticated("invalid token")

    subject = payload.get("sub")
    if subject is None or payload.get("realm") != realm:
        raise Unauthenticated("invalid token")

    try:
        return int(subject)
    except (TypeError, ValueError):
        raise Unauthenticated("invalid token")
