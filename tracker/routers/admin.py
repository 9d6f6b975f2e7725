from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.models.admin import Admin
from tracker.schemas.admin import (
    AdminLogin, AdminCreate, AdminUpdate, AdminProfileEnvelope, AdminList, SubAdminList, ManagerList,
    SubAdminCreated, ManagerCreated, AdminUpdated, Message,
)
from tracker.schemas.tokens import AdminToken
from tracker.services.admin_manager import AdminManager
from tracker.utils.auth import get_current_admin

router = APIRouter()


@router.post("/login", response_model=AdminToken)
def admin_login(credentials: AdminLogin, db: Session = Depends(get_db)):
    admin, token = AdminManager(db).login(credentials.email, credentials.password)
    return {"user": admin, "token": token}


@router.get("/profile", response_model=AdminProfileEnvelope)
def admin_profile(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return {"admin": AdminManager(db).profile(current_admin)}


@router.get("/admins", response_model=AdminList)
def list_admins(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return {"admins": AdminManager(db).list_admins(current_admin)}


@router.get("/sub-admins", response_model=SubAdminList)
def list_sub_admins(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return {"subAdmins": AdminManager(db).list_sub_admins(current_admin)}


@router.post("/sub-admins", response_model=SubAdminCreated, status_code=status.HTTP_201_CREATED)
def create_sub_admin(
    payload: AdminCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    sub_admin = AdminManager(db).create_sub_admin(current_admin, payload.name, payload.email, payload.password)
    return {"message": "Sub-admin created successfully", "subAdmin": sub_admin}


@router.put("/sub-admins/{admin_id}", response_model=AdminUpdated)
def update_sub_admin(
    admin_id: int,
    payload: AdminUpdate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    updated = AdminManager(db).update_account(
        current_admin,
        admin_id,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    message = "Profile updated successfully" if updated.id == current_admin.id else "Sub-admin updated successfully"
    return {"message": message, "admin": updated}


@router.delete("/sub-admins/{admin_id}", response_model=Message)
def delete_sub_admin(admin_id: int, db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    AdminManager(db).delete_account(current_admin, admin_id)
    return {"message": "Sub-admin deleted successfully"}


@router.get("/managers", response_model=ManagerList)
def list_managers(db: Session = Depends(get_db), current_admin: Admin = Depends(get_current_admin)):
    return {"managers": AdminManager(db).list_managers(current_admin)}


@router.post("/managers", response_model=ManagerCreated, status_code=status.HTTP_201_CREATED)
def create_manager(
    payload: AdminCreate,
    db: Session = Depends(get_db),
    current_admin: Admin = Depends(get_current_admin),
):
    manager = AdminManager(db).create_manager(current_admin, payload.name, payload.email, payload.password)
    return {"message": "Manager created successfully", "manager": manager}
