"""
Async HTTP client for the Online Full Service API.

Error responses come back as the same exception classes the server raised
(``fullservice.core.errors``); connection failures and timeouts become
``TransportError``.
"""
import logging
from typing import Any, List, Optional

import httpx

from fullservice.client.session import SessionContext
from fullservice.core.errors import TransportError, error_from_response
from fullservice.schemas.article import ArticleCreate, ArticleRead
from fullservice.schemas.listing import ListingCreate, ListingRead
from fullservice.schemas.order import OrderCreate, OrderRead, Receipt
from fullservice.schemas.payment_method import PaymentMethodCreate, PaymentMethodRead
from fullservice.schemas.user import (
    AuthResponse,
    IdentityRead,
    ProfileUpdate,
    SessionRecordPayload,
)

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: SessionContext,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 20.0,
    ):
        self.session = session
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        try:
            resp = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(str(e) or None)

        if resp.is_error:
            try:
                body = resp.json()
            except ValueError:
                body = {"detail": resp.text}
            raise error_from_response(resp.status_code, body if isinstance(body, dict) else {})
        return resp

    async def _json(self, method: str, path: str, **kwargs) -> Any:
        resp = await self._request(method, path, **kwargs)
        return resp.json()

    # --- identity ---

    async def register(self, name: str, username: str, email: str, password: str) -> AuthResponse:
        data = await self._json("POST", "/auth/register", json={
            "name": name,
            "username": username,
            "email": email,
            "password": password,
        })
        return AuthResponse.model_validate(data)

    async def login(self, email: str, password: str) -> AuthResponse:
        data = await self._json("POST", "/auth/login", json={"email": email, "password": password})
        return AuthResponse.model_validate(data)

    async def me(self) -> IdentityRead:
        return IdentityRead.model_validate(await self._json("GET", "/auth/me"))

    async def update_profile(self, changes: ProfileUpdate) -> IdentityRead:
        data = await self._json(
            "PATCH", "/auth/me", json=changes.model_dump(mode="json", exclude_unset=True)
        )
        return IdentityRead.model_validate(data)

    async def record_session(self, payload: SessionRecordPayload) -> bool:
        data = await self._json("POST", "/auth/sessions", json=payload.model_dump(mode="json"))
        return bool(data.get("recorded"))

    # --- catalog ---

    async def search_listings(self, term: str = "") -> List[ListingRead]:
        params = {"q": term} if term else None
        data = await self._json("GET", "/listings/", params=params)
        return [ListingRead.model_validate(item) for item in data]

    async def get_listing(self, listing_id: int) -> ListingRead:
        return ListingRead.model_validate(await self._json("GET", f"/listings/{listing_id}"))

    async def create_listing(self, listing: ListingCreate) -> ListingRead:
        data = await self._json("POST", "/listings/", json=listing.model_dump(mode="json"))
        return ListingRead.model_validate(data)

    async def deactivate_listing(self, listing_id: int) -> ListingRead:
        data = await self._json("POST", f"/listings/{listing_id}/deactivate")
        return ListingRead.model_validate(data)

    async def list_articles(self) -> List[ArticleRead]:
        data = await self._json("GET", "/articles/")
        return [ArticleRead.model_validate(item) for item in data]

    async def create_article(self, article: ArticleCreate) -> ArticleRead:
        data = await self._json("POST", "/articles/", json=article.model_dump(mode="json"))
        return ArticleRead.model_validate(data)

    async def deactivate_article(self, article_id: int) -> ArticleRead:
        data = await self._json("POST", f"/articles/{article_id}/deactivate")
        return ArticleRead.model_validate(data)

    # --- payments & orders ---

    async def my_payment_methods(self) -> List[PaymentMethodRead]:
        data = await self._json("GET", "/payment-methods/mine")
        return [PaymentMethodRead.model_validate(item) for item in data]

    async def seller_payment_methods(self, seller_id: int) -> List[PaymentMethodRead]:
        data = await self._json("GET", f"/payment-methods/seller/{seller_id}")
        return [PaymentMethodRead.model_validate(item) for item in data]

    async def create_payment_method(self, method: PaymentMethodCreate) -> PaymentMethodRead:
        data = await self._json("POST", "/payment-methods/", json=method.model_dump(mode="json"))
        return PaymentMethodRead.model_validate(data)

    async def create_order(self, order: OrderCreate) -> OrderRead:
        data = await self._json("POST", "/orders/", json=order.model_dump(mode="json"))
        return OrderRead.model_validate(data)

    async def list_orders(self, box: str = "received") -> List[OrderRead]:
        data = await self._json("GET", "/orders/", params={"box": box})
        return [OrderRead.model_validate(item) for item in data]

    async def approve_order(self, order_id: int) -> OrderRead:
        return OrderRead.model_validate(await self._json("POST", f"/orders/{order_id}/approve"))

    async def reject_order(self, order_id: int) -> OrderRead:
        return OrderRead.model_validate(await self._json("POST", f"/orders/{order_id}/reject"))

    async def receipt(self, order_id: int) -> Receipt:
        return Receipt.model_validate(await self._json("GET", f"/orders/{order_id}/receipt"))

    async def receipt_document(self, order_id: int, fmt: str = "html") -> str:
        resp = await self._request("GET", f"/orders/{order_id}/receipt", params={"format": fmt})
        return resp.text

    # --- identity management ---

    async def list_identities(self) -> List[IdentityRead]:
        data = await self._json("GET", "/admin/identities")
        return [IdentityRead.model_validate(item) for item in data]

    async def set_role(self, user_id: int, role: str) -> IdentityRead:
        data = await self._json("PUT", f"/admin/identities/{user_id}/role", json={"role": role})
        return IdentityRead.model_validate(data)

    async def toggle_ban(self, user_id: int) -> IdentityRead:
        return IdentityRead.model_validate(await self._json("POST", f"/admin/identities/{user_id}/ban"))
