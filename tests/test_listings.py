from decimal import Decimal

LISTING = {
    "name": "Vintage Camera",
    "description": "Film camera in good condition",
    "price": "120.50",
    "contact_platform": "Telegram",
    "contact_info": "@seller",
}


def test_standard_user_cannot_create_listing(client, db, make_user, headers):
    from fullservice.models.listing import Listing

    user = make_user()
    resp = client.post("/listings/", json=LISTING, headers=headers(user))
    assert resp.status_code == 403
    assert resp.json()["code"] == "forbidden"
    assert db.query(Listing).count() == 0


def test_admin_creates_listing_with_ordered_images(client, make_user, headers):
    admin = make_user(role="admin")
    body = dict(LISTING, images=["data:image/png;base64,A", "data:image/png;base64,B"])

    resp = client.post("/listings/", json=body, headers=headers(admin))
    assert resp.status_code == 201
    created = resp.json()
    assert created["target_number"] == f"T{created['id']:06d}"
    assert Decimal(created["price"]) == Decimal("120.50")
    assert created["owner"]["id"] == admin.id

    fetched = client.get(f"/listings/{created['id']}", headers=headers(admin)).json()
    assert fetched["images"] == ["data:image/png;base64,A", "data:image/png;base64,B"]


def test_elevated_user_can_create_listing(client, make_user, headers):
    vip = make_user(role="VIP")
    resp = client.post("/listings/", json=LISTING, headers=headers(vip))
    assert resp.status_code == 201


def test_create_listing_rejects_negative_price(client, make_user, headers):
    admin = make_user(role="admin")
    resp = client.post("/listings/", json=dict(LISTING, price="-1"), headers=headers(admin))
    assert resp.status_code == 422
    assert resp.json()["code"] == "validation_error"


def test_create_listing_missing_name(client, make_user, headers):
    admin = make_user(role="admin")
    body = {k: v for k, v in LISTING.items() if k != "name"}
    resp = client.post("/listings/", json=body, headers=headers(admin))
    assert resp.status_code == 422
    assert "name" in resp.json()["detail"]


def test_search_is_newest_first_and_matches_name_only(client, make_user, make_listing, headers):
    seller = make_user(role="admin")
    phone = make_listing(seller, name="Red Phone")
    make_listing(seller, name="Blue Lamp")
    case = make_listing(seller, name="phone case")
    user = make_user()

    everything = client.get("/listings/", headers=headers(user)).json()
    assert [item["name"] for item in everything] == ["phone case", "Blue Lamp", "Red Phone"]

    matched = client.get("/listings/", params={"q": "PHONE"}, headers=headers(user)).json()
    assert [item["id"] for item in matched] == [case.id, phone.id]

    # descriptions are "<name> description"; a description-only word does not match
    assert client.get("/listings/", params={"q": "description"}, headers=headers(user)).json() == []


def test_search_excludes_inactive(client, make_user, make_listing, headers):
    seller = make_user(role="admin")
    make_listing(seller, name="Hidden", is_active=False)
    visible = make_listing(seller, name="Shown")

    items = client.get("/listings/", headers=headers(seller)).json()
    assert [item["id"] for item in items] == [visible.id]


def test_owner_deactivates_listing(client, make_user, make_listing, headers):
    seller = make_user(role="admin")
    listing = make_listing(seller)

    resp = client.post(f"/listings/{listing.id}/deactivate", headers=headers(seller))
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False
    assert client.get(f"/listings/{listing.id}", headers=headers(seller)).status_code == 404


def test_non_owner_cannot_deactivate(client, make_user, make_listing, headers):
    seller = make_user(role="admin")
    other = make_user(role="admin")
    listing = make_listing(seller)

    resp = client.post(f"/listings/{listing.id}/deactivate", headers=headers(other))
    assert resp.status_code == 403
    assert client.get(f"/listings/{listing.id}", headers=headers(other)).json()["is_active"] is True


def test_missing_listing_is_not_found(client, make_user, headers):
    user = make_user()
    resp = client.get("/listings/999", headers=headers(user))
    assert resp.status_code == 404
    assert resp.json()["code"] == "not_found"
