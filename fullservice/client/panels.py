"""
Stateful client panels.

Mutations are applied to local state only after the server confirms them;
on failure the local state is left untouched, ``last_error`` is set and the
error is raised to the caller.
"""
import logging
from typing import List, Optional

from fullservice.client.api import ApiClient
from fullservice.client.search import ListView
from fullservice.core.errors import (
    Forbidden,
    FullServiceError,
    MissingProof,
    NotFound,
    OrderConflict,
    ValidationError,
)
from fullservice.core.permissions import Action, can_perform, require
from fullservice.schemas.listing import ListingRead
from fullservice.schemas.order import OrderCreate, OrderRead
from fullservice.schemas.payment_method import PaymentMethodRead
from fullservice.schemas.user import IdentityRead

logger = logging.getLogger(__name__)


class IdentityPanel:
    def __init__(self, api: ApiClient, actor: IdentityRead):
        require(actor, Action.MANAGE_IDENTITIES)
        self.api = api
        self.actor = actor
        self.view: ListView[IdentityRead] = ListView()
        self.last_error: Optional[FullServiceError] = None

    async def load(self) -> List[IdentityRead]:
        return await self.view.load(self.api.list_identities)

    def filtered(self, query: str = "") -> List[IdentityRead]:
        """Substring match on name, username or email; presentation only."""
        needle = query.strip().lower()
        if not needle:
            return list(self.view.items)
        return [
            u for u in self.view.items
            if needle in u.name.lower()
            or needle in u.username.lower()
            or needle in u.email.lower()
        ]

    def has_controls(self, target: IdentityRead) -> bool:
        return can_perform(self.actor, Action.CHANGE_ROLE, target)

    def _find(self, user_id: int) -> IdentityRead:
        for u in self.view.items:
            if u.id == user_id:
                return u
        raise NotFound("User not found")

    def _replace(self, updated: IdentityRead) -> None:
        self.view.items = [updated if u.id == updated.id else u for u in self.view.items]

    async def _mutate(self, action: Action, user_id: int, call, *args) -> IdentityRead:
        target = self._find(user_id)
        require(self.actor, action, target)
        self.last_error = None
        try:
            updated = await call(user_id, *args)
        except FullServiceError as e:
            logger.error("%s on %s failed: %s", action.value, user_id, e)
            self.last_error = e
            raise
        self._replace(updated)
        return updated

    async def set_role(self, user_id: int, role: str) -> IdentityRead:
        return await self._mutate(Action.CHANGE_ROLE, user_id, self.api.set_role, role)

    async def toggle_ban(self, user_id: int) -> IdentityRead:
        return await self._mutate(Action.TOGGLE_BAN, user_id, self.api.toggle_ban)


class CheckoutFlow:
    """
    Buyer side of an order: pick one of the seller's active payment methods,
    attach a proof-of-payment image, submit.
    """

    def __init__(self, api: ApiClient, buyer: IdentityRead, listing: ListingRead):
        if not can_perform(buyer, Action.PURCHASE_LISTING, listing):
            raise Forbidden("You cannot buy your own listing")
        self.api = api
        self.buyer = buyer
        self.listing = listing
        self.methods: List[PaymentMethodRead] = []
        self.selected: Optional[PaymentMethodRead] = None
        self.proof: Optional[str] = None
        self.order: Optional[OrderRead] = None

    async def load_methods(self) -> List[PaymentMethodRead]:
        self.methods = await self.api.seller_payment_methods(self.listing.owner_id)
        return self.methods

    @property
    def can_checkout(self) -> bool:
        return bool(self.methods)

    def select(self, method_id: int) -> PaymentMethodRead:
        method = next((m for m in self.methods if m.id == method_id), None)
        if method is None:
            raise NotFound("Payment method not found")
        # switching methods drops the previous choice and its proof
        self.selected = method
        self.proof = None
        return method

    def attach_proof(self, image_data_url: str) -> None:
        if not image_data_url:
            raise MissingProof()
        self.proof = image_data_url

    @property
    def can_submit(self) -> bool:
        return self.selected is not None and bool(self.proof) and self.order is None

    async def submit(self) -> OrderRead:
        if self.order is not None:
            raise OrderConflict("Order already submitted")
        if self.selected is None:
            raise ValidationError("Please select a payment method")
        if not self.proof:
            raise MissingProof()

        self.order = await self.api.create_order(OrderCreate(
            product_id=self.listing.id,
            payment_method_id=self.selected.id,
            payment_proof_url=self.proof,
        ))
        return self.order
