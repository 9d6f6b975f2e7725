# tracker/utils/auth.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.exceptions import Unauthenticated
from tracker.models.admin import Admin
from tracker.models.user import User
from tracker.utils.policy import Principal
from tracker.utils.security import decode_access_token, USER_REALM, ADMIN_REALM

bearer_scheme = HTTPBearer(auto_error=False)


def parse_bearer(credentials: Optional[HTTPAuthorizationCredentials], header_present: bool = False) -> str:
    """Check that the credentials came from exactly ``Authorization: Bearer <token>``"""
    if credentials is None:
        if header_present:
            raise Unauthenticated("invalid authorization format")
        raise Unauthenticated("missing authorization header")

    token = credentials.credentials
    if credentials.scheme != "Bearer" or not token or any(char.isspace() for char in token):
        raise Unauthenticated("invalid authorization format")

    return token


def get_bearer_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    # HTTPBearer answers None both for a missing header and for a foreign scheme
    return parse_bearer(credentials, header_present=bool(request.headers.get("Authorization")))


def get_current_user(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)) -> User:
    # the role is always read back from storage, never from the token
    user_id = decode_access_token(token, realm=USER_REALM)

    user = db.get(User, user_id)
    if user is None:
        raise Unauthenticated("user not found")

    return user


def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    return current_user.as_principal()


def get_current_admin(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)) -> Admin:
    admin_id = decode_access_token(token, realm=ADMIN_REALM)

    admin = db.get(Admin, admin_id)
    if admin is None:
        raise Unauthenticated("user not found")

    return admin
