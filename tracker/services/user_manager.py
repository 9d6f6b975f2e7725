# tracker/services/user_manager.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from tracker.config.settings import settings, Settings
from tracker.database import commit
from tracker.exceptions import Conflict, NotFound, ValidationError
from tracker.models.user import User
from tracker.utils.policy import Action, Resource, ResourceKind, UserRole, authorize, parse_user_role
from tracker.utils.security import create_access_token, hash_password, verify_password, USER_REALM

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "email already registered"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserManager:
    """Employee-side accounts: registration, login and role administration"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def register(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        user_type: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Tuple[User, str]:
        """Create an account and return it with a fresh access token.

        An unknown or missing ``user_type`` registers an employee.
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("email and password are required")
        if len(password) < 6:
            raise ValidationError("password must be at least 6 characters")

        if self.get_by_email(email) is not None:
            raise Conflict(EMAIL_TAKEN)

        role = parse_user_role(user_type) or UserRole.EMPLOYEE
        user = User(
            name=(name or "").strip() or None,
            email=email,
            password_hash=hash_password(password),
            user_type=role.value,
            department=department,
        )
        self.db.add(user)
        # the unique index still guards against a concurrent registration
        commit(self.db, conflict_message=EMAIL_TAKEN)
        self.db.refresh(user)

        logger.info("Registered user %s as %s", user.id, role.value)
        return user, create_access_token(user.id, realm=USER_REALM)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        user = self.get_by_email(email)
        if user is None or not verify_password(password or "", user.password_hash):
            logger.info("Failed login for %s", normalize_email(email))
            raise ValidationError("invalid credentials")

        return user, create_access_token(user.id, realm=USER_REALM)

    def list_users(self, requester: User) -> List[User]:
        authorize(requester.as_principal(), Action.LIST_ALL, Resource(kind=ResourceKind.ACCOUNT))
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def user_stats(self, requester: User) -> dict:
        authorize(requester.as_principal(), Action.VIEW_ANALYTICS, Resource(kind=ResourceKind.ACCOUNT))

        counts = dict(
            self.db.query(User.user_type, func.count(User.id)).group_by(User.user_type).all()
        )
        return {
            "employees": counts.get(UserRole.EMPLOYEE.value, 0),
            "assistants": counts.get(UserRole.ASSISTANT.value, 0),
            "admins": counts.get(UserRole.ADMIN.value, 0),
            "total": sum(counts.values()),
        }

    def change_role(self, requester: User, user_id: int, user_type: str) -> User:
        role = parse_user_role(user_type)
        if role is None:
            raise ValidationError("invalid role")

        principal = requester.as_principal()
        authorize(principal, Action.UPDATE, Resource(kind=ResourceKind.ACCOUNT, id=user_id))

        target = self.db.get(User, user_id)
        if target is None:
            raise NotFound("user not found")

        authorize(principal, Action.UPDATE, Resource(kind=ResourceKind.ACCOUNT, id=target.id, role=target.role))
        if target.id == requester.id and role != target.role:
            raise ValidationError("cannot change your own role")

        target.user_type = role.value
        commit(self.db)
        self.db.refresh(target)

        logger.info("User %s role set to %s by user %s", target.id, role.value, requester.id)
        return target

    def delete_user(self, requester: User, user_id: int) -> None:
        """Delete an account along with its tasks and incentives"""
        principal = requester.as_principal()
        authorize(principal, Action.DELETE, Resource(kind=ResourceKind.ACCOUNT, id=user_id))

        target = self.db.get(User, user_id)
        if target is None:
            raise NotFound("user not found")

        authorize(principal, Action.DELETE, Resource(kind=ResourceKind.ACCOUNT, id=target.id, role=target.role))

        self.db.delete(target)
        commit(self.db)
        logger.info("User %s deleted by user %s", user_id, requester.id)


def ensure_default_admin(db: Session, config: Settings = settings) -> User:
    """Create the configured admin account when no account uses its email"""
    email = normalize_email(config.default_admin_email)
    user = db.query(User).filter(User.email == email).first()
    if user is not None:
        return user

    user = User(
        name=config.default_admin_name,
        email=email,
        password_hash=hash_password(config.default_admin_password),
        user_type=UserRole.ADMIN.value,
    )
    db.add(user)
    commit(db, conflict_message=EMAIL_TAKEN)
    db.refresh(user)

    logger.info("Created default admin account %s", email)
    return user
