# tracker/services/admin_manager.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from tracker.database import commit
from tracker.exceptions import Conflict, NotFound, Unauthenticated, ValidationError
from tracker.models.admin import Admin
from tracker.services.user_manager import EMAIL_TAKEN, normalize_email
from tracker.utils.policy import Action, AdminRole, Resource, ResourceKind, authorize
from tracker.utils.security import create_access_token, hash_password, verify_password, ADMIN_REALM

logger = logging.getLogger(__name__)


def account_resource(admin: Admin) -> Resource:
    return Resource(
        kind=ResourceKind.ACCOUNT,
        id=admin.id,
        role=admin.admin_role,
        parent_id=admin.parent_admin_id,
    )


class AdminManager:
    """Admin-portal accounts.

    A main admin owns the portal. Sub-admins hang off a parent main admin
    and can see their siblings; managers sit outside that tree and only
    exchange tasks (see :class:`AdminTaskManager`).
    """

    def __init__(self, db: Session):
        self.db = db

    def _get_admin(self, admin_id: int, missing: str = "admin not found") -> Admin:
        admin = self.db.query(Admin).options(joinedload(Admin.parent)).filter(Admin.id == admin_id).first()
        if admin is None:
            raise NotFound(missing)
        return admin

    def _ensure_email_free(self, email: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(Admin).filter(Admin.email == email)
        if exclude_id is not None:
            query = query.filter(Admin.id != exclude_id)
        if query.first() is not None:
            raise Conflict(EMAIL_TAKEN)

    def login(self, email: str, password: str) -> Tuple[Admin, str]:
        admin = self.db.query(Admin).filter(Admin.email == normalize_email(email)).first()
        if admin is None or not verify_password(password or "", admin.password_hash):
            logger.info("Failed admin login for %s", normalize_email(email))
            raise Unauthenticated("invalid credentials")

        return admin, create_access_token(admin.id, realm=ADMIN_REALM)

    def profile(self, admin: Admin) -> Admin:
        return self._get_admin(admin.id)

    def list_admins(self, requester: Admin) -> List[Admin]:
        """Every portal account, newest first; only a main admin passes"""
        authorize(requester.as_principal(), Action.LIST_ALL, Resource(kind=ResourceKind.ACCOUNT))
        return self.db.query(Admin).order_by(Admin.created_at.desc(), Admin.id.desc()).all()

    def list_sub_admins(self, requester: Admin) -> List[Admin]:
        authorize(
            requester.as_principal(),
            Action.LIST_ALL,
            Resource(kind=ResourceKind.ACCOUNT, role=AdminRole.SUB_ADMIN),
        )

        query = self.db.query(Admin).filter(Admin.role == AdminRole.SUB_ADMIN.value)
        if requester.admin_role == AdminRole.SUB_ADMIN:
            if requester.parent_admin_id is None:
                # without a parent there are no siblings to see
                query = query.filter(Admin.id == requester.id)
            else:
                query = query.filter(Admin.parent_admin_id == requester.parent_admin_id)

        return query.order_by(Admin.created_at.desc(), Admin.id.desc()).all()

    def list_managers(self, requester: Admin) -> List[Admin]:
        authorize(
            requester.as_principal(),
            Action.LIST_ALL,
            Resource(kind=ResourceKind.ACCOUNT, role=AdminRole.MANAGER),
        )
        return (
            self.db.query(Admin)
            .filter(Admin.role == AdminRole.MANAGER.value)
            .order_by(Admin.created_at.desc(), Admin.id.desc())
            .all()
        )

    def _create_account(self, requester: Admin, role: AdminRole, name: str, email: str, password: str) -> Admin:
        authorize(requester.as_principal(), Action.CREATE, Resource(kind=ResourceKind.ACCOUNT, role=role))

        name = (name or "").strip()
        email = normalize_email(email)
        if not name or not email or not password:
            raise ValidationError("name, email, and password are required")
        if len(password) < 6:
            raise ValidationError("password must be at least 6 characters")
        self._ensure_email_free(email)

        # sub-admins belong to the main admin that created them; managers have no parent
        parent_id = requester.id if role == AdminRole.SUB_ADMIN else None
        account = Admin(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role.value,
            parent_admin_id=parent_id,
        )
        self.db.add(account)
        commit(self.db, conflict_message=EMAIL_TAKEN)
        self.db.refresh(account)

        logger.info("Admin %s created %s account %s", requester.id, role.value, account.id)
        return account

    def create_sub_admin(self, requester: Admin, name: str, email: str, password: str) -> Admin:
        return self._create_account(requester, AdminRole.SUB_ADMIN, name, email, password)

    def create_manager(self, requester: Admin, name: str, email: str, password: str) -> Admin:
        return self._create_account(requester, AdminRole.MANAGER, name, email, password)

    def update_account(
        self,
        requester: Admin,
        target_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> Admin:
        """Change name, email or password. Role and parent are never touched here."""
        target = self._get_admin(target_id, missing="target admin not found")
        authorize(requester.as_principal(), Action.UPDATE, account_resource(target))

        if name is not None and name.strip():
            target.name = name.strip()
        if email:
            email = normalize_email(email)
            self._ensure_email_free(email, exclude_id=target.id)
            target.email = email
        if password:
            if len(password) < 6:
                raise ValidationError("password must be at least 6 characters")
            target.password_hash = hash_password(password)

        commit(self.db, conflict_message=EMAIL_TAKEN)
        self.db.refresh(target)

        logger.info("Admin %s updated account %s", requester.id, target.id)
        return target

    def delete_account(self, requester: Admin, target_id: int) -> None:
        principal = requester.as_principal()
        authorize(principal, Action.DELETE, Resource(kind=ResourceKind.ACCOUNT, id=target_id))

        target = self._get_admin(target_id, missing="sub-admin not found")
        authorize(principal, Action.DELETE, account_resource(target))

        self.db.delete(target)
        commit(self.db)
        logger.info("Admin %s deleted account %s", requester.id, target_id)
