"""HTTP surface: envelopes, error mapping and auth wiring."""
from errandhub.extensions import db
from errandhub.models.user import User


def test_join_login_and_verify(client) -> None:
    resp = client.post("/api/v1/auth/join", json={
        "email": "runner@example.com",
        "password": "pw",
        "name": "Runner",
        "gender": "F",
    })
    assert resp.status_code == 201
    assert resp.get_json()["success"] is True

    dup = client.post("/api/v1/auth/join", json={"email": "runner@example.com", "password": "pw"})
    assert dup.status_code == 409
    assert dup.get_json()["error"]["code"] == "CONFLICT"

    login = client.post("/api/v1/auth/login", json={"email": "runner@example.com", "password": "pw"})
    assert login.status_code == 200
    token = login.get_json()["data"]["token"]

    me = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert me.get_json()["data"]["user"]["email"] == "runner@example.com"


def test_wrong_password_is_forbidden(client, make_user) -> None:
    user = make_user()
    resp = client.post("/api/v1/auth/login", json={"email": user.email, "password": "nope"})
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["success"] is False
    assert body["error"]["code"] == "FORBIDDEN"


def test_missing_token(client) -> None:
    resp = client.get("/api/v1/chatting/rooms")
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "UNAUTHORIZED"


def test_order_listing_is_public(client, make_user, make_order) -> None:
    make_order(make_user())
    resp = client.get("/api/v1/shopper/orders")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["totalCount"] == 1
    assert data["orders"][0]["role"] == "shopper"


def test_order_listing_me(client, make_user, make_order, auth_headers) -> None:
    me, other = make_user(), make_user()
    make_order(me, role="runner")
    make_order(other, role="runner")

    resp = client.get("/api/v1/runner/orders?runnerId=me", headers=auth_headers(me))
    data = resp.get_json()["data"]
    assert data["totalCount"] == 1
    assert data["orders"][0]["owner_id"] == me.id

    anon = client.get("/api/v1/runner/orders?runnerId=me")
    assert anon.status_code == 400
    assert anon.get_json()["error"]["code"] == "INVALID_ARGUMENT"


def test_negative_offset_rejected(client) -> None:
    resp = client.get("/api/v1/shopper/orders?offset=-1")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_ARGUMENT"


def test_create_order_validates_role_fields(client, make_user, auth_headers) -> None:
    runner = make_user()
    bad = client.post("/api/v1/runner/orders", json={"distance": "3KM"}, headers=auth_headers(runner))
    assert bad.status_code == 400

    ok = client.post("/api/v1/runner/orders", json={
        "distance": "1.5KM",
        "estimatedTime": "1pm",
        "startTime": "15:30:00",
        "endTime": "18:00:00",
        "payments": "card",
    }, headers=auth_headers(runner))
    assert ok.status_code == 201
    order = ok.get_json()["data"]["order"]
    assert order["distance"] == "1.5KM"
    assert order["start_time"] == "15:30:00"
    assert order["status"] == "WAITING"


def test_request_workflow_over_http(client, make_user, auth_headers) -> None:
    shopper, runner = make_user(), make_user()

    created = client.post("/api/v1/shopper/orders", json={
        "title": "Batteries",
        "priority": "NORMAL",
        "orderItems": [{"name": "AA", "count": 4, "price": 500}],
    }, headers=auth_headers(shopper))
    order_id = created.get_json()["data"]["order"]["id"]

    req = client.post(f"/api/v1/shopper/orders/{order_id}/requests", json={}, headers=auth_headers(runner))
    assert req.status_code == 201
    request_id = req.get_json()["data"]["request"]["id"]

    dup = client.post(f"/api/v1/shopper/orders/{order_id}/requests", json={}, headers=auth_headers(runner))
    assert dup.status_code == 409

    bad_enum = client.put(
        f"/api/v1/shopper/orders/requests/{request_id}",
        json={"requestStatus": "MATCHING"},
        headers=auth_headers(shopper),
    )
    assert bad_enum.status_code == 400
    assert bad_enum.get_json()["error"]["code"] == "INVALID_ARGUMENT"

    skip = client.put(
        f"/api/v1/shopper/orders/requests/{request_id}",
        json={"requestStatus": "DELIVERED"},
        headers=auth_headers(shopper),
    )
    assert skip.status_code == 409
    assert skip.get_json()["error"]["code"] == "INVALID_TRANSITION"

    matched = client.put(
        f"/api/v1/shopper/orders/requests/{request_id}",
        json={"requestStatus": "MATCHED"},
        headers=auth_headers(shopper),
    )
    assert matched.status_code == 200
    assert matched.get_json()["data"]["request"]["request_status"] == "MATCHED"

    listed = client.get("/api/v1/runner/requests?runnerId=me", headers=auth_headers(runner))
    data = listed.get_json()["data"]
    assert data["totalCount"] == 1
    assert data["requests"][0]["order"]["id"] == order_id

    detail = client.get(f"/api/v1/shopper/orders/{order_id}")
    assert detail.get_json()["data"]["order"]["status"] == "MATCHED"
    assert len(detail.get_json()["data"]["order"]["requests"]) == 1

    deleted = client.delete(f"/api/v1/shopper/orders/requests/{request_id}", headers=auth_headers(runner))
    assert deleted.get_json()["data"] == {"isDeleted": True}


def test_request_on_other_role_path_is_not_found(client, make_user, make_order, auth_headers) -> None:
    order = make_order(make_user())
    resp = client.post(f"/api/v1/runner/orders/{order.id}/requests", json={}, headers=auth_headers(make_user()))
    assert resp.status_code == 404


def test_delete_order_by_stranger(client, make_user, make_order, auth_headers) -> None:
    order = make_order(make_user())
    resp = client.delete(f"/api/v1/shopper/orders/{order.id}", headers=auth_headers(make_user()))
    assert resp.status_code == 403


def test_chat_over_http(client, make_user, auth_headers, broadcaster) -> None:
    a, b = make_user(), make_user()

    joined = client.post("/api/v1/chatting/room", json={"userIds": [b.id]}, headers=auth_headers(a))
    assert joined.status_code == 200
    room_key = joined.get_json()["data"]["chattingRoom"]["room_key"]
    assert room_key == "-".join(str(i) for i in sorted([a.id, b.id]))
    assert {u["id"] for u in joined.get_json()["data"]["users"]} == {a.id, b.id}

    again = client.post("/api/v1/chatting/room", json={"userIds": [a.id]}, headers=auth_headers(b))
    assert again.get_json()["data"]["chattingRoom"]["id"] == joined.get_json()["data"]["chattingRoom"]["id"]

    for text in ("hi", "there"):
        sent = client.post(
            "/api/v1/chatting/message",
            json={"roomKey": room_key, "message": text},
            headers=auth_headers(a),
        )
        assert sent.status_code == 200
    assert [e[2]["message"] for e in broadcaster.events] == ["hi", "there"]

    page = client.get(f"/api/v1/chatting/messages?roomKey={room_key}&limit=1", headers=auth_headers(b))
    assert [m["message"] for m in page.get_json()["data"]["chattingMessage"]] == ["there"]

    rooms = client.get("/api/v1/chatting/rooms", headers=auth_headers(b))
    assert len(rooms.get_json()["data"]["chattingRooms"]) == 1


def test_chat_single_member_and_outsider(client, make_user, auth_headers, broadcaster) -> None:
    a, b, outsider = make_user(), make_user(), make_user()

    solo = client.post("/api/v1/chatting/room", json={"userIds": [a.id]}, headers=auth_headers(a))
    assert solo.status_code == 400
    assert solo.get_json()["error"]["code"] == "INVALID_MEMBERSHIP"

    room_key = client.post(
        "/api/v1/chatting/room", json={"userIds": [b.id]}, headers=auth_headers(a)
    ).get_json()["data"]["chattingRoom"]["room_key"]

    sneaky = client.post(
        "/api/v1/chatting/message",
        json={"roomKey": room_key, "message": "hello?"},
        headers=auth_headers(outsider),
    )
    assert sneaky.status_code == 404
    assert broadcaster.events == []

    lookup = client.get(f"/api/v1/chatting/room?roomKey={room_key}", headers=auth_headers(outsider))
    assert lookup.status_code == 404


def test_user_soft_delete(client, make_user, auth_headers) -> None:
    user = make_user()
    email = user.email
    headers = auth_headers(user)

    resp = client.delete("/api/v1/users/me", headers=headers)
    assert resp.get_json()["data"] == {"isDeleted": True}

    stored = db.session.get(User, user.id)
    assert stored.is_active is False
    assert stored.email != email
    assert stored.email.startswith("deleted:")

    login = client.post("/api/v1/auth/login", json={"email": email, "password": "secret-password"})
    assert login.status_code == 403


def test_update_profile_and_password(client, make_user, auth_headers) -> None:
    user = make_user()
    headers = auth_headers(user)

    resp = client.put("/api/v1/users/me", json={
        "name": "New Name",
        "address": "Somewhere 1",
        "startContactTime": "09:00:00",
    }, headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]["user"]
    assert data["name"] == "New Name"
    assert data["start_contact_time"] == "09:00:00"

    wrong = client.put("/api/v1/users/me/password", json={"password": "bad", "newPassword": "x"}, headers=headers)
    assert wrong.status_code == 403

    ok = client.put(
        "/api/v1/users/me/password",
        json={"password": "secret-password", "newPassword": "fresh"},
        headers=headers,
    )
    assert ok.status_code == 200
    login = client.post("/api/v1/auth/login", json={"email": user.email, "password": "fresh"})
    assert login.status_code == 200


def test_deactivated_token_is_rejected(client, make_user, auth_headers) -> None:
    user = make_user()
    headers = auth_headers(user)
    client.delete("/api/v1/users/me", headers=headers)

    resp = client.post("/api/v1/shopper/orders", json={"title": "Late order"}, headers=headers)
    assert resp.status_code == 401
    assert resp.get_json()["error"]["code"] == "UNAUTHORIZED"

    verify = client.get("/api/v1/auth/verify", headers=headers)
    assert verify.status_code == 401


def test_room_member_list_is_capped(client, make_user, auth_headers) -> None:
    user = make_user()
    resp = client.post(
        "/api/v1/chatting/room",
        json={"userIds": list(range(1000, 1051))},
        headers=auth_headers(user),
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "INVALID_ARGUMENT"
