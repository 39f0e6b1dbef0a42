"""
Central capability check.

Both the services and the client consult ``can_perform`` so that what the UI
offers and what the server accepts cannot drift apart. Identities and targets
are read by attribute, so ORM rows and the pydantic read models both work.
"""
import logging
from enum import Enum
from typing import Any, Optional

from fullservice.core.errors import Forbidden
from fullservice.core.roles import ROLE_ADMIN, ROLE_ELEVATED

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CREATE_LISTING = "create_listing"
    DEACTIVATE_LISTING = "deactivate_listing"
    PURCHASE_LISTING = "purchase_listing"
    CREATE_ARTICLE = "create_article"
    DEACTIVATE_ARTICLE = "deactivate_article"
    MANAGE_IDENTITIES = "manage_identities"
    CHANGE_ROLE = "change_role"
    TOGGLE_BAN = "toggle_ban"
    DECIDE_ORDER = "decide_order"
    VIEW_RECEIPT = "view_receipt"


# actions granted by role alone
ROLE_ACTIONS = {
    Action.CREATE_LISTING: {ROLE_ADMIN, ROLE_ELEVATED},
    Action.CREATE_ARTICLE: {ROLE_ELEVATED},
    Action.MANAGE_IDENTITIES: {ROLE_ELEVATED},
    Action.CHANGE_ROLE: {ROLE_ELEVATED},
    Action.TOGGLE_BAN: {ROLE_ELEVATED},
}


def _is_self(identity: Any, target: Any) -> bool:
    return target is not None and getattr(target, "id", None) == identity.id


def can_perform(identity: Any, action: Action, target: Optional[Any] = None) -> bool:
    if identity is None:
        return False

    allowed_roles = ROLE_ACTIONS.get(action)
    if allowed_roles is not None and identity.role not in allowed_roles:
        return False

    if action in (Action.CHANGE_ROLE, Action.TOGGLE_BAN):
        # the acting identity's own row never gets these controls
        return target is not None and not _is_self(identity, target)

    if action == Action.DEACTIVATE_LISTING:
        return target is not None and target.owner_id == identity.id

    if action == Action.PURCHASE_LISTING:
        return (
            target is not None
            and target.owner_id != identity.id
            and bool(getattr(target, "is_active", True))
        )

    if action == Action.DEACTIVATE_ARTICLE:
        return target is not None and target.author_id == identity.id

    if action == Action.DECIDE_ORDER:
        return target is not None and target.seller_id == identity.id

    if action == Action.VIEW_RECEIPT:
        return target is not None and identity.id in (target.buyer_id, target.seller_id)

    return allowed_roles is not None


def require(identity: Any, action: Action, target: Optional[Any] = None) -> None:
    if not can_perform(identity, action, target):
        logger.warning(
            "Identity %s (%s) refused %s on %s",
            getattr(identity, "id", None),
            getattr(identity, "role", None),
            action.value,
            getattr(target, "id", None),
        )
        raise Forbidden()
