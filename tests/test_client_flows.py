import asyncio

import httpx
import pytest

from fullservice.client import media, tracking
from fullservice.client.api import ApiClient
from fullservice.client.auth import AuthFlow
from fullservice.client.panels import CheckoutFlow, IdentityPanel
from fullservice.client.session import SessionContext
from fullservice.client.store import LocalStore
from fullservice.core.config import ClientSettings
from fullservice.core.errors import (
    DuplicateIdentity,
    Forbidden,
    FullServiceError,
    InvalidCredentials,
    MissingProof,
    NotFound,
    OrderConflict,
    TransportError,
    ValidationError,
    error_from_response,
)
from fullservice.core.security import create_access_token
from fullservice.models.user_session import UserSession
from fullservice.schemas.listing import ListingCreate
from fullservice.schemas.user import IdentityRead, Location, ProfileUpdate

IP_URL = "http://ip.test/"


def ip_transport(ip="198.51.100.4"):
    return httpx.MockTransport(lambda request: httpx.Response(200, json={"ip": ip}))


def failing_transport(request):
    raise httpx.ConnectError("unreachable", request=request)


@pytest.fixture
def session(tmp_path):
    return SessionContext(LocalStore(tmp_path / "state.json"))


@pytest.fixture
async def api(app_db, session):
    client = ApiClient("http://testserver", session, transport=httpx.ASGITransport(app=app_db))
    yield client
    await client.aclose()


@pytest.fixture
def client_settings(tmp_path):
    return ClientSettings(
        ip_lookup_url=IP_URL,
        state_path=tmp_path / "state.json",
        location_timeout=0.05,
    )


def sign_in_as(session, user):
    session.set_identity(IdentityRead.model_validate(user), create_access_token(user.id))


# --- error mapping ---

@pytest.mark.parametrize(
    "status, body, expected",
    [
        (409, {"detail": "Email already exists", "code": "duplicate_identity"}, DuplicateIdentity),
        (401, {"detail": "Invalid email or password", "code": "invalid_credentials"}, InvalidCredentials),
        (409, {"code": "order_conflict"}, OrderConflict),
        (422, {"detail": [{"loc": ["body", "name"]}]}, ValidationError),
        (502, {}, TransportError),
    ],
)
def test_error_from_response(status, body, expected):
    err = error_from_response(status, body)
    assert type(err) is expected


def test_error_from_response_keeps_unknown_status():
    err = error_from_response(401, {"detail": "Could not validate credentials"})
    assert type(err) is FullServiceError
    assert err.status_code == 401
    assert err.message == "Could not validate credentials"


async def test_unreachable_server_is_transport_error(session):
    client = ApiClient("http://testserver", session, transport=httpx.MockTransport(failing_transport))
    with pytest.raises(TransportError):
        await client.search_listings()
    await client.aclose()


async def test_api_errors_come_back_typed(api, make_user, session):
    sign_in_as(session, make_user())
    with pytest.raises(Forbidden):
        await api.create_listing(ListingCreate(name="x", description="y", price="1"))
    with pytest.raises(NotFound):
        await api.get_listing(404)


# --- auth flow ---

async def test_sign_up_stores_session_and_tracks(api, session, db, client_settings):
    hints = []

    async def geolocator(high_accuracy=False):
        hints.append(high_accuracy)
        return Location(latitude=16.8, longitude=96.1, accuracy=12.0)

    flow = AuthFlow(
        api, session, geolocator=geolocator, settings=client_settings,
        screen_resolution="1920x1080", ip_transport=ip_transport(),
    )
    user = await flow.sign_up("Mya", "mya", "mya@example.com", "pw")

    assert user.role == "users"
    assert session.is_authenticated
    assert session.token
    assert flow.current_identity().username == "mya"

    row = db.query(UserSession).one()
    assert row.ip_address == "198.51.100.4"
    assert row.location == {"latitude": 16.8, "longitude": 96.1, "accuracy": 12.0}
    assert row.device_info["screenResolution"] == "1920x1080"
    assert hints == [True]


async def test_sign_in_survives_failed_lookups(api, session, db, make_user, client_settings):
    make_user(email="kyaw@example.com", password="pw")

    async def slow_geolocator(**hints):
        await asyncio.sleep(5)

    flow = AuthFlow(
        api, session, geolocator=slow_geolocator, settings=client_settings,
        ip_transport=httpx.MockTransport(failing_transport),
    )
    await flow.sign_in("kyaw@example.com", "pw")

    assert session.is_authenticated
    row = db.query(UserSession).one()
    assert row.ip_address is None
    assert row.location is None


async def test_sign_in_failures_leave_session_empty(api, session, make_user, client_settings):
    make_user(email="kyaw@example.com", password="pw", is_banned=True)
    flow = AuthFlow(api, session, settings=client_settings, ip_transport=ip_transport())

    with pytest.raises(ValidationError):
        await flow.sign_in("", "pw")
    with pytest.raises(InvalidCredentials):
        await flow.sign_in("kyaw@example.com", "pw")
    assert session.is_authenticated is False


async def test_duplicate_sign_up(api, session, make_user, client_settings):
    make_user(username="taken")
    flow = AuthFlow(api, session, settings=client_settings, ip_transport=ip_transport())
    with pytest.raises(DuplicateIdentity):
        await flow.sign_up("N", "taken", "new@example.com", "pw")
    assert session.current_identity() is None


async def test_profile_update_overwrites_snapshot_and_sign_out(api, session, make_user, client_settings):
    sign_in_as(session, make_user())
    flow = AuthFlow(api, session, settings=client_settings, ip_transport=ip_transport())

    await flow.update_profile(ProfileUpdate(name="Updated"))
    assert session.current_identity().name == "Updated"

    flow.sign_out()
    assert session.current_identity() is None


async def test_set_profile_image_caches_locally(api, session, make_user, client_settings):
    user = make_user()
    sign_in_as(session, user)
    flow = AuthFlow(api, session, settings=client_settings, ip_transport=ip_transport())

    updated = await flow.set_profile_image("data:image/png;base64,AA==")
    assert updated.profile_image_url == "data:image/png;base64,AA=="
    assert session.current_identity().profile_image_url == "data:image/png;base64,AA=="
    assert media.load_profile_image(session.store, user.id) == "data:image/png;base64,AA=="


async def test_check_gps(api, session, client_settings):
    async def denied(**hints):
        raise PermissionError("denied")

    assert await AuthFlow(api, session, geolocator=denied, settings=client_settings).check_gps() is False
    assert await AuthFlow(api, session, settings=client_settings).check_gps() is False


# --- tracking lookups ---

async def test_public_ip_lookup_failures_yield_none():
    bad_status = httpx.MockTransport(lambda request: httpx.Response(500))
    not_json = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>"))

    assert await tracking.lookup_public_ip(IP_URL, transport=ip_transport("203.0.113.9")) == "203.0.113.9"
    assert await tracking.lookup_public_ip(IP_URL, transport=bad_status) is None
    assert await tracking.lookup_public_ip(IP_URL, transport=not_json) is None


async def test_public_ip_lookup_rejects_odd_replies():
    numeric = httpx.MockTransport(lambda request: httpx.Response(200, json={"ip": 12345}))
    listed = httpx.MockTransport(lambda request: httpx.Response(200, json=["198.51.100.4"]))

    assert await tracking.lookup_public_ip(IP_URL, transport=numeric) is None
    assert await tracking.lookup_public_ip(IP_URL, transport=listed) is None
    assert await tracking.lookup_public_ip("http://ip.test:port/", transport=ip_transport()) is None


async def test_locate_ignores_non_position_answers():
    async def confused(**hints):
        return {"lat": 1}

    assert await tracking.locate(confused, timeout=0.5) is None


async def test_sign_in_survives_bad_shaped_ip_reply(api, session, db, make_user, client_settings):
    make_user(email="kyaw@example.com", password="pw")
    numeric_ip = httpx.MockTransport(lambda request: httpx.Response(200, json={"ip": 12345}))
    flow = AuthFlow(api, session, settings=client_settings, ip_transport=numeric_ip)

    user = await flow.sign_in("kyaw@example.com", "pw")

    assert user.email == "kyaw@example.com"
    assert session.is_authenticated
    assert db.query(UserSession).one().ip_address is None


async def test_track_session_swallows_unusable_location(api, session, db, make_user, client_settings):
    sign_in_as(session, make_user())

    async def confused(**hints):
        return "somewhere"

    flow = AuthFlow(api, session, geolocator=confused, settings=client_settings, ip_transport=ip_transport())
    assert await flow.track_session() is True
    assert db.query(UserSession).one().location is None


def test_device_info_shape():
    info = tracking.device_info("800x600")
    assert set(info) == {"userAgent", "platform", "language", "screenResolution"}
    assert info["screenResolution"] == "800x600"


# --- identity panel ---

async def test_identity_panel_requires_elevated_role(api, make_user):
    with pytest.raises(Forbidden):
        IdentityPanel(api, IdentityRead.model_validate(make_user(role="admin")))


async def test_identity_panel_applies_confirmed_changes(api, session, make_user):
    vip = make_user(role="VIP", name="Boss")
    target = make_user(name="Thida", email="thida@example.com")
    sign_in_as(session, vip)

    panel = IdentityPanel(api, session.current_identity())
    await panel.load()
    assert [u.id for u in panel.filtered("THIDA")] == [target.id]
    assert len(panel.filtered("")) == 2

    me = next(u for u in panel.view.items if u.id == vip.id)
    assert panel.has_controls(me) is False
    with pytest.raises(Forbidden):
        await panel.set_role(vip.id, "users")

    updated = await panel.set_role(target.id, "admin")
    assert updated.role == "admin"
    assert next(u for u in panel.view.items if u.id == target.id).role == "admin"


async def test_identity_panel_keeps_state_on_failure(api, session, make_user):
    vip = make_user(role="VIP")
    target = make_user()
    sign_in_as(session, vip)

    panel = IdentityPanel(api, session.current_identity())
    await panel.load()
    before = list(panel.view.items)

    down = ApiClient("http://testserver", session, transport=httpx.MockTransport(
        lambda request: httpx.Response(503, json={"detail": "Service unavailable", "code": "transport_error"})
    ))
    panel.api = down
    with pytest.raises(TransportError):
        await panel.toggle_ban(target.id)
    await down.aclose()

    assert panel.view.items == before
    assert isinstance(panel.last_error, TransportError)


# --- checkout ---

async def test_checkout_flow(api, session, make_user, make_listing, make_method):
    seller = make_user(role="admin")
    buyer = make_user()
    listing = make_listing(seller, name="Bike", price="80.00")
    first = make_method(seller, name="KBZ Pay")
    second = make_method(seller, name="Wave Money")
    sign_in_as(session, buyer)

    flow = CheckoutFlow(api, session.current_identity(), await api.get_listing(listing.id))
    await flow.load_methods()
    assert flow.can_checkout
    assert {m.id for m in flow.methods} == {first.id, second.id}

    with pytest.raises(ValidationError):
        await flow.submit()

    flow.select(first.id)
    flow.attach_proof("data:image/png;base64,P")
    assert flow.can_submit

    # switching methods discards the proof
    flow.select(second.id)
    assert flow.proof is None
    with pytest.raises(MissingProof):
        await flow.submit()

    flow.attach_proof("data:image/png;base64,P")
    order = await flow.submit()
    assert order.status == "pending"
    assert order.payment_method_id == second.id
    assert flow.can_submit is False

    with pytest.raises(OrderConflict):
        await flow.submit()
    assert [o.id for o in await api.list_orders("sent")] == [order.id]


async def test_checkout_refuses_own_listing(api, session, make_user, make_listing):
    seller = make_user(role="admin")
    listing = make_listing(seller)
    sign_in_as(session, seller)

    with pytest.raises(Forbidden):
        CheckoutFlow(api, session.current_identity(), await api.get_listing(listing.id))


async def test_checkout_without_methods(api, session, make_user, make_listing):
    seller = make_user(role="admin")
    listing = make_listing(seller)
    sign_in_as(session, make_user())

    flow = CheckoutFlow(api, session.current_identity(), await api.get_listing(listing.id))
    await flow.load_methods()
    assert flow.can_checkout is False
    with pytest.raises(NotFound):
        flow.select(1)


async def test_order_decisions_through_client(api, session, make_user, make_listing, make_method):
    seller = make_user(role="admin")
    buyer = make_user()
    listing = make_listing(seller, price="5.00")
    method = make_method(seller)

    sign_in_as(session, buyer)
    flow = CheckoutFlow(api, session.current_identity(), await api.get_listing(listing.id))
    await flow.load_methods()
    flow.select(method.id)
    flow.attach_proof("data:image/png;base64,P")
    order = await flow.submit()

    with pytest.raises(Forbidden):
        await api.approve_order(order.id)

    sign_in_as(session, seller)
    assert (await api.list_orders("received"))[0].id == order.id
    assert (await api.approve_order(order.id)).status == "approved"
    with pytest.raises(OrderConflict):
        await api.reject_order(order.id)

    receipt = await api.receipt(order.id)
    assert receipt.order_number == order.order_number
    assert "ORDER RECEIPT" in await api.receipt_document(order.id, "text")
