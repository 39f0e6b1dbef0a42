from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fullservice.core.database import get_db
from fullservice.core.security import get_current_user
from fullservice.models.user import User
from fullservice.schemas.user import IdentityRead, RoleUpdate
from fullservice.services import access

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/identities", response_model=List[IdentityRead])
def list_identities(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return access.list_identities(db, current_user)


@router.put("/identities/{user_id}/role", response_model=IdentityRead)
def set_role(
    user_id: int,
    body: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return access.set_role(db, current_user, user_id, body.role)


@router.post("/identities/{user_id}/ban", response_model=IdentityRead)
def toggle_ban(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return access.toggle_ban(db, current_user, user_id)
