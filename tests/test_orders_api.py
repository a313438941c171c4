ORDERS = {"orders": [
    {"_id": "db1", "orderNumber": "ORD-1", "user": {"fullname": "Asha Rao", "email": "asha@x.com"},
     "status": "processing", "paymentStatus": "completed", "total": 1200, "items": [{"name": "Scanner", "quantity": 1, "price": 1200}]},
    {"_id": "db2", "orderNumber": "ORD-2", "user": {"fullname": "Vikram", "email": "vik@x.com"},
     "status": "delivered", "paymentStatus": "pending", "total": 800},
]}


def test_list_orders_with_filters(client, fake_store, admin_headers):
    fake_store.on("GET", "/admin/orders", ORDERS)
    body = client.get("/orders", params={"search": "vik", "payment": "pending"}, headers=admin_headers).json()
    assert [o["id"] for o in body["orders"]] == ["ORD-2"]
    assert body["stats"] == {"total": 2, "processing": 1, "delivered": 1, "revenue": 2000}
    assert body["statusLabels"]["out_for_delivery"] == "Out For Delivery"
    assert fake_store.calls[-1]["params"] == {}


def test_status_filter_is_sent_to_store(client, fake_store, admin_headers):
    fake_store.on("GET", "/admin/orders", {"orders": []})
    client.get("/orders", params={"status": "shipped"}, headers=admin_headers)
    assert fake_store.calls[-1]["params"] == {"status": "shipped"}


def test_unknown_status_filter(client, fake_store, admin_headers):
    resp = client.get("/orders", params={"status": "lost"}, headers=admin_headers)
    assert resp.status_code == 400
    assert fake_store.calls == []


def test_store_failure_on_list(client, fake_store, admin_headers):
    fake_store.on("GET", "/admin/orders", {"message": "boom"}, status=500)
    resp = client.get("/orders", headers=admin_headers)
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Failed to load orders"


def test_order_detail_has_timeline(client, fake_store, admin_headers):
    fake_store.on("GET", "/admin/orders/db1", {"order": {
        **ORDERS["orders"][0], "status": "shipped",
        "tracking": {"carrier": "Atlas Express", "currentLocation": "Lucknow hub"},
    }})
    body = client.get("/orders/db1", headers=admin_headers).json()
    assert body["order"]["id"] == "ORD-1"
    assert body["timeline"]["progress"]["horizontal"] == 50.0
    assert body["timeline"]["tracking"]["current_location"] == "Lucknow hub"
    assert body["trackingForm"]["carrier"] == "Atlas Express"


def test_compact_timeline(client, fake_store, admin_headers):
    fake_store.on("GET", "/admin/orders/db1", {"_id": "db1", "status": "cancelled"})
    body = client.get("/orders/db1/timeline", params={"compact": True}, headers=admin_headers).json()
    assert body["cancelled"] is True
    assert body["compact"] is True


def test_update_status(client, fake_store, admin_headers):
    fake_store.on("PUT", "/admin/orders/db1", {"success": True})
    resp = client.put("/orders/db1/status", json={"status": "out_for_delivery"}, headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Order status updated to Out For Delivery"
    assert body["timeline"]["steps"][3]["current"] is True
    assert body["order"] is None
    assert fake_store.calls[-1]["json"] == {"status": "out_for_delivery"}


def test_cancel_from_any_state(client, fake_store, admin_headers):
    fake_store.on("PUT", "/admin/orders/db2", {"order": {**ORDERS["orders"][1], "status": "cancelled"}})
    body = client.put("/orders/db2/status", json={"status": "cancelled"}, headers=admin_headers).json()
    assert body["timeline"]["cancelled"] is True
    assert body["order"]["status"] == "cancelled"


def test_invalid_status_never_reaches_store(client, fake_store, admin_headers):
    resp = client.put("/orders/db1/status", json={"status": "refunded"}, headers=admin_headers)
    assert resp.status_code == 422
    assert fake_store.calls == []


def test_update_status_failure(client, fake_store, admin_headers):
    fake_store.on("PUT", "/admin/orders/db1", {}, status=503)
    resp = client.put("/orders/db1/status", json={"status": "confirmed"}, headers=admin_headers)
    assert resp.status_code == 502
    assert resp.json()["detail"] == "Failed to update order status"


def test_update_payment_status(client, fake_store, admin_headers):
    fake_store.on("PUT", "/admin/orders/db1", {})
    resp = client.put("/orders/db1/payment-status", json={"payment_status": "failed"}, headers=admin_headers)
    assert resp.json()["payment_status"] == "failed"
    assert fake_store.calls[-1]["json"] == {"paymentStatus": "failed"}


def test_update_tracking(client, fake_store, admin_headers):
    fake_store.on("PUT", "/admin/orders/db1", {})
    resp = client.put("/orders/db1/tracking", json={
        "current_location": "Gorakhpur depot", "estimated_delivery": "2026-10-25",
    }, headers=admin_headers)
    assert resp.status_code == 200
    assert fake_store.calls[-1]["json"] == {"tracking": {
        "carrier": "Atlas Express", "currentLocation": "Gorakhpur depot", "estimatedDelivery": "2026-10-25",
    }}
