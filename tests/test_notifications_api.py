ORDERS = {"orders": [{"_id": "64f0a1b2c3d4e5f6a7b8c9d0", "status": "processing", "total": 2500}]}
USERS = {"users": [{"_id": "u1", "fullname": "Asha Rao", "role": "customer"}]}


def _seed(fake_store):
    fake_store.on("GET", "/admin/orders", ORDERS)
    fake_store.on("GET", "/admin/users", USERS)


def test_feed(client, fake_store, admin_headers):
    _seed(fake_store)
    body = client.get("/notifications", headers=admin_headers).json()
    ids = [n["id"] for n in body["notifications"]]
    assert ids == ["order:64f0a1b2c3d4e5f6a7b8c9d0", "user:u1"]
    assert body["notifications"][0]["message"] == "Order #A7B8C9D0 - ₹2,500"
    assert body["unreadCount"] == 1
    assert "stock" in body["filters"]


def test_feed_limits_store_queries(client, fake_store, admin_headers):
    _seed(fake_store)
    client.get("/notifications", headers=admin_headers)
    assert fake_store.called("GET", "/admin/orders")[0]["params"] == {"limit": "5"}


def test_filter_by_type(client, fake_store, admin_headers):
    _seed(fake_store)
    body = client.get("/notifications", params={"filter": "user"}, headers=admin_headers).json()
    assert [n["type"] for n in body["notifications"]] == ["user"]
    body = client.get("/notifications", params={"filter": "unread"}, headers=admin_headers).json()
    assert [n["type"] for n in body["notifications"]] == ["order"]


def test_unknown_filter(client, fake_store, admin_headers):
    resp = client.get("/notifications", params={"filter": "spam"}, headers=admin_headers)
    assert resp.status_code == 400
    assert fake_store.calls == []


def test_mark_read(client, fake_store, admin_headers):
    _seed(fake_store)
    client.post("/notifications/order:64f0a1b2c3d4e5f6a7b8c9d0/read", headers=admin_headers)
    body = client.get("/notifications", headers=admin_headers).json()
    assert body["unreadCount"] == 0
    assert all(n["read"] for n in body["notifications"])


def test_mark_all_read(client, fake_store, admin_headers):
    _seed(fake_store)
    assert client.post("/notifications/read-all", headers=admin_headers).json() == {"ok": True}
    assert client.get("/notifications", headers=admin_headers).json()["unreadCount"] == 0


def test_dismiss_and_clear(client, fake_store, admin_headers):
    _seed(fake_store)
    client.delete("/notifications/user:u1", headers=admin_headers)
    ids = [n["id"] for n in client.get("/notifications", headers=admin_headers).json()["notifications"]]
    assert ids == ["order:64f0a1b2c3d4e5f6a7b8c9d0"]
    client.delete("/notifications", headers=admin_headers)
    assert client.get("/notifications", headers=admin_headers).json()["notifications"] == []


def test_empty_feed_is_all_caught_up(client, fake_store, admin_headers):
    body = client.get("/notifications", headers=admin_headers).json()
    assert [n["title"] for n in body["notifications"]] == ["All Caught Up!"]
    assert body["unreadCount"] == 0


def test_preferences_hide_types(client, fake_store, admin_headers):
    _seed(fake_store)
    assert client.get("/notifications/preferences", headers=admin_headers).json()["orders"] is True
    prefs = client.put("/notifications/preferences", json={"orders": False}, headers=admin_headers).json()
    assert prefs["orders"] is False
    assert prefs["users"] is True
    body = client.get("/notifications", headers=admin_headers).json()
    assert [n["type"] for n in body["notifications"]] == ["user"]
