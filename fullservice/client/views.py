"""Screen selection from the session and navigation state."""
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from fullservice.core.permissions import Action, can_perform


class Screen(str, Enum):
    LOADING = "loading"
    SIGN_IN = "sign_in"
    SIGN_UP = "sign_up"
    GPS_PERMISSION = "gps_permission"
    HOME = "home"
    PRODUCTS = "products"
    NEWS = "news"
    HISTORY = "history"
    PROFILE = "profile"
    MANAGE = "manage"


BASE_TABS = ["home", "products", "news", "history", "profile"]


@dataclass
class ViewState:
    identity: Optional[Any] = None
    gps_granted: bool = False
    tab: str = "home"
    show_sign_up: bool = False
    loading: bool = False


def nav_tabs(identity: Any) -> List[str]:
    tabs = list(BASE_TABS)
    if can_perform(identity, Action.MANAGE_IDENTITIES):
        tabs.append("manage")
    return tabs


def compose_view(state: ViewState) -> Screen:
    if state.loading:
        return Screen.LOADING

    if state.identity is None:
        return Screen.SIGN_UP if state.show_sign_up else Screen.SIGN_IN

    if not state.gps_granted:
        return Screen.GPS_PERMISSION

    # unknown tabs and tabs the role does not get land on home
    if state.tab not in nav_tabs(state.identity):
        return Screen.HOME
    return Screen(state.tab)
