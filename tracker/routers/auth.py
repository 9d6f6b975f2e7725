from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tracker.database import get_db
from tracker.models.user import User
from tracker.schemas.user import UserCreate, UserLogin, UserEnvelope, UserList, RoleUpdate, UserStatsEnvelope
from tracker.schemas.tokens import Token
from tracker.services.user_manager import UserManager
from tracker.utils.auth import get_current_user

router = APIRouter()


@router.post("/register", response_model=Token)
def register(user: UserCreate, db: Session = Depends(get_db)):
    new_user, token = UserManager(db).register(
        email=user.email,
        password=user.password,
        name=user.name,
        user_type=user.user_type,
        department=user.department,
    )
    return {"user": new_user, "token": token}


@router.post("/login", response_model=Token)
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user, token = UserManager(db).login(user.email, user.password)
    return {"user": db_user, "token": token}


@router.get("/me", response_model=UserEnvelope)
def me(current_user: User = Depends(get_current_user)):
    return {"user": current_user}


@router.get("/users", response_model=UserList)
def list_users(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return {"users": UserManager(db).list_users(current_user)}


@router.get("/stats", response_model=UserStatsEnvelope)
def user_stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return {"stats": UserManager(db).user_stats(current_user)}


@router.patch("/users/{user_id}/role", response_model=UserEnvelope)
def change_role(
    user_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"user": UserManager(db).change_role(current_user, user_id, payload.user_type)}


@router.delete("/users/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    UserManager(db).delete_user(current_user, user_id)
    return {"success": True}
