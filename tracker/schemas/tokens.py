# tracker/schemas/tokens.py
from pydantic import BaseModel

from tracker.schemas.user import UserOut
from tracker.schemas.admin import AdminOut


class Token(BaseModel):
    user: UserOut
    token: str

    model_config = {
        "from_attributes": True
    }


class AdminToken(BaseModel):
    user: AdminOut
    token: str
