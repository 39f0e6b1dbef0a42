from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fullservice.core.database import get_db
from fullservice.core.security import create_access_token, get_current_user
from fullservice.models.user import User
from fullservice.schemas.user import (
    AuthResponse,
    IdentityRead,
    LoginPayload,
    ProfileUpdate,
    RegisterPayload,
    SessionRecordPayload,
    SessionRecordResponse,
)
from fullservice.services import identity

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user.id),
        user=IdentityRead.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterPayload, db: Session = Depends(get_db)):
    user = identity.register(db, body)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
def login(body: LoginPayload, db: Session = Depends(get_db)):
    user = identity.authenticate(db, body.email, body.password)
    return _auth_response(user)


@router.get("/me", response_model=IdentityRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=IdentityRead)
def update_me(
    body: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return identity.update_profile(db, current_user, body)


@router.post(
    "/sessions",
    response_model=SessionRecordResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
def record_session(
    body: SessionRecordPayload,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # always 202: the audit row is best-effort
    recorded = identity.record_session(db, current_user, body)
    return SessionRecordResponse(recorded=recorded)
