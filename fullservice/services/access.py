"""Privileged identity management: role changes and ban toggles."""
import logging
from typing import List

from sqlalchemy.orm import Session

from fullservice.core.permissions import Action, require
from fullservice.models.user import User
from fullservice.services.identity import get_identity

logger = logging.getLogger(__name__)


def list_identities(db: Session, actor: User) -> List[User]:
    require(actor, Action.MANAGE_IDENTITIES)
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def set_role(db: Session, actor: User, target_id: int, new_role: str) -> User:
    target = get_identity(db, target_id)
    require(actor, Action.CHANGE_ROLE, target)

    old_role = target.role
    target.role = new_role
    db.commit()
    db.refresh(target)

    logger.info("Identity %s changed role of %s: %s -> %s", actor.id, target.id, old_role, new_role)
    return target


def toggle_ban(db: Session, actor: User, target_id: int) -> User:
    """
    Flip the banned flag. Live tokens of the target are left alone; the flag
    is only checked on the next sign-in.
    """
    target = get_identity(db, target_id)
    require(actor, Action.TOGGLE_BAN, target)

    target.is_banned = not target.is_banned
    db.commit()
    db.refresh(target)

    logger.info("Identity %s set banned=%s on %s", actor.id, target.is_banned, target.id)
    return target
