import logging
from typing import Optional

import httpx
from pydantic import ValidationError as SchemaError

from fullservice.client import media, tracking
from fullservice.client.api import ApiClient
from fullservice.client.session import SessionContext
from fullservice.core.config import ClientSettings, get_client_settings
from fullservice.core.errors import FullServiceError, ValidationError
from fullservice.schemas.user import IdentityRead, ProfileUpdate, SessionRecordPayload

logger = logging.getLogger(__name__)


class AuthFlow:
    """Sign-up, sign-in, sign-out and profile edits on top of the session context."""

    def __init__(
        self,
        api: ApiClient,
        session: SessionContext,
        geolocator: Optional[tracking.Geolocator] = None,
        settings: Optional[ClientSettings] = None,
        screen_resolution: Optional[str] = None,
        ip_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api = api
        self.session = session
        self.geolocator = geolocator
        self.settings = settings or get_client_settings()
        self.screen_resolution = screen_resolution
        self.ip_transport = ip_transport

    async def sign_up(self, name: str, username: str, email: str, password: str) -> IdentityRead:
        if not all((name, username, email, password)):
            raise ValidationError()

        auth = await self.api.register(name, username, email, password)
        self.session.set_identity(auth.user, auth.access_token)
        await self.track_session()
        return auth.user

    async def sign_in(self, email: str, password: str) -> IdentityRead:
        if not email or not password:
            raise ValidationError()

        auth = await self.api.login(email, password)
        self.session.set_identity(auth.user, auth.access_token)
        await self.track_session()
        return auth.user

    def sign_out(self) -> None:
        # there is no server-side token to revoke
        self.session.clear()

    def current_identity(self) -> Optional[IdentityRead]:
        return self.session.current_identity()

    async def update_profile(self, changes: ProfileUpdate) -> IdentityRead:
        updated = await self.api.update_profile(changes)
        self.session.set_identity(updated)
        return updated

    async def set_profile_image(self, data_url: str) -> IdentityRead:
        identity = self.session.current_identity()
        if identity is None:
            raise ValidationError("Not signed in")
        media.save_profile_image(self.session.store, identity.id, data_url)
        return await self.update_profile(ProfileUpdate(profile_image_url=data_url))

    async def check_gps(self) -> bool:
        location = await tracking.locate(self.geolocator, timeout=self.settings.gps_check_timeout)
        return location is not None

    async def track_session(self) -> bool:
        """Record the sign-in audit row; any failure is logged and dropped."""
        ip = await tracking.lookup_public_ip(
            self.settings.ip_lookup_url, timeout=self.settings.ip_lookup_timeout,
            transport=self.ip_transport,
        )
        location = await tracking.locate(self.geolocator, timeout=self.settings.location_timeout)
        try:
            payload = SessionRecordPayload(
                device_info=tracking.device_info(self.screen_resolution),
                ip_address=ip,
                location=location,
            )
            return await self.api.record_session(payload)
        except (FullServiceError, SchemaError) as e:
            logger.warning("Session tracking error: %s", e)
            return False
