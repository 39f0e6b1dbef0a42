"""Wires the client pieces together from ``ClientSettings``."""
from dataclasses import dataclass
from typing import Optional

import httpx

from fullservice.client import i18n, tracking
from fullservice.client.api import ApiClient
from fullservice.client.auth import AuthFlow
from fullservice.client.search import ListingSearch
from fullservice.client.session import SessionContext
from fullservice.client.store import LocalStore
from fullservice.core.config import ClientSettings, get_client_settings


@dataclass
class ClientApp:
    settings: ClientSettings
    store: LocalStore
    session: SessionContext
    api: ApiClient
    auth: AuthFlow
    search: ListingSearch
    language: str

    def set_language(self, lang: str) -> None:
        i18n.save_language(self.store, lang)
        self.language = lang

    def translate(self, key: str) -> str:
        return i18n.translate(key, self.language)

    async def aclose(self) -> None:
        await self.api.aclose()


def create_client(
    settings: Optional[ClientSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    geolocator: Optional[tracking.Geolocator] = None,
    screen_resolution: Optional[str] = None,
    ip_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ClientApp:
    settings = settings or get_client_settings()

    store = LocalStore(settings.state_path)
    session = SessionContext(store)
    api = ApiClient(settings.api_base_url, session, transport=transport)

    return ClientApp(
        settings=settings,
        store=store,
        session=session,
        api=api,
        auth=AuthFlow(
            api,
            session,
            geolocator=geolocator,
            settings=settings,
            screen_resolution=screen_resolution,
            ip_transport=ip_transport,
        ),
        search=ListingSearch(api.search_listings, delay=settings.search_debounce_seconds),
        language=i18n.load_language(store, default=settings.default_language),
    )
