import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fullservice.core.errors import DuplicateIdentity, InvalidCredentials, NotFound
from fullservice.core.roles import ROLE_STANDARD
from fullservice.models.user import User
from fullservice.models.user_session import UserSession
from fullservice.schemas.user import ProfileUpdate, RegisterPayload, SessionRecordPayload

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Canonical form used for every stored and looked-up email."""
    return email.strip().lower()


def _ensure_unique(db: Session, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None) -> None:
    filters = []
    if username is not None:
        filters.append(User.username == username)
    if email is not None:
        filters.append(User.email == normalize_email(email))
    if not filters:
        return

    query = db.query(User).filter(or_(*filters))
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)

    existing = query.first()
    if existing is None:
        return
    if username is not None and existing.username == username:
        raise DuplicateIdentity("Username already exists")
    raise DuplicateIdentity("Email already exists")


def register(db: Session, payload: RegisterPayload) -> User:
    email = normalize_email(str(payload.email))
    _ensure_unique(db, payload.username, email)

    user = User(
        name=payload.name,
        username=payload.username,
        email=email,
        password=payload.password,
        role=ROLE_STANDARD,
        is_banned=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent sign-up
        db.rollback()
        raise DuplicateIdentity()
    db.refresh(user)

    logger.info("Registered identity %s (%s)", user.id, user.username)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = (
        db.query(User)
        .filter(
            User.email == normalize_email(email),
            User.password == password,
            User.is_banned.is_(False),
        )
        .first()
    )
    if user is None:
        raise InvalidCredentials()
    return user


def get_identity(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user


def update_profile(db: Session, user: User, changes: ProfileUpdate) -> User:
    data = changes.model_dump(exclude_unset=True)
    if "email" in data and data["email"] is not None:
        data["email"] = normalize_email(str(data["email"]))

    _ensure_unique(db, data.get("username"), data.get("email"), exclude_id=user.id)

    for field, value in data.items():
        if value is None and field != "profile_image_url":
            continue
        setattr(user, field, value)

    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateIdentity()
    db.refresh(user)
    return user


def record_session(db: Session, user: User, payload: SessionRecordPayload) -> bool:
    """
    Best-effort audit insert. A failed write is logged and reported as
    ``False``; it never blocks sign-in.
    """
    device_info = payload.device_info or {}
    session_row = UserSession(
        user_id=user.id,
        ip_address=payload.ip_address,
        device_info=device_info,
        platform_name=device_info.get("platform"),
        location=payload.location.model_dump() if payload.location else None,
    )
    try:
        db.add(session_row)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Session tracking error for user %s: %s", user.id, e)
        return False
    return True
