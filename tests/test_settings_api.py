def test_settings_fall_back_to_local_copy(client, fake_store, admin_headers):
    body = client.get("/settings", headers=admin_headers).json()
    assert body["source"] == "local"
    assert body["settings"]["storeSettings"]["storeName"] == "Atlas Arrow"
    assert body["settings"]["shippingSettings"]["freeShippingThreshold"] == 5000


def test_settings_from_store_merge_over_defaults(client, fake_store, admin_headers):
    fake_store.on("GET", "/admin/settings", {"settings": {"storeSettings": {"storeName": "Atlas HQ"}}})
    body = client.get("/settings", headers=admin_headers).json()
    assert body["source"] == "store"
    assert body["settings"]["storeSettings"]["storeName"] == "Atlas HQ"
    assert body["settings"]["storeSettings"]["currency"] == "INR"


def test_save_settings_to_store(client, fake_store, admin_headers):
    fake_store.on("PUT", "/admin/settings", {"success": True})
    body = client.put("/settings", json={"shippingSettings": {"standardShipping": 80}}, headers=admin_headers).json()
    assert body["savedToStore"] is True
    assert body["message"] == "Settings saved successfully!"
    sent = fake_store.calls[-1]["json"]
    assert sent["shippingSettings"]["standardShipping"] == 80
    assert sent["storeSettings"]["storeName"] == "Atlas Arrow"


def test_save_settings_locally_when_store_fails(client, fake_store, admin_headers):
    body = client.put("/settings", json={"storeSettings": {"storeName": "Offline Store"}}, headers=admin_headers).json()
    assert body["savedToStore"] is False
    assert body["message"] == "Settings saved locally!"
    reloaded = client.get("/settings", headers=admin_headers).json()
    assert reloaded["source"] == "local"
    assert reloaded["settings"]["storeSettings"]["storeName"] == "Offline Store"


def test_invalid_settings_rejected(client, admin_headers):
    resp = client.put("/settings", json={"shippingSettings": {"standardShipping": -1}}, headers=admin_headers)
    assert resp.status_code == 422


def test_password_requires_all_fields(client, fake_store, admin_headers):
    resp = client.put("/settings/password", json={"current_password": "old", "new_password": "secret1"},
                      headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please fill all password fields"


def test_password_mismatch(client, admin_headers):
    resp = client.put("/settings/password", json={
        "current_password": "old", "new_password": "secret1", "confirm_password": "secret2",
    }, headers=admin_headers)
    assert resp.json()["detail"] == "New passwords do not match"


def test_password_too_short(client, admin_headers):
    resp = client.put("/settings/password", json={
        "current_password": "old", "new_password": "abc", "confirm_password": "abc",
    }, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Password must be at least 6 characters"


def test_password_change(client, fake_store, admin_headers):
    fake_store.on("PUT", "/profile/password", {"success": True})
    resp = client.put("/settings/password", json={
        "current_password": "old-pass", "new_password": "secret1", "confirm_password": "secret1",
    }, headers=admin_headers)
    assert resp.json()["message"] == "Password changed successfully!"
    assert fake_store.calls[-1]["json"] == {"currentPassword": "old-pass", "newPassword": "secret1"}
    assert fake_store.calls[-1]["auth"] == "Bearer store-token"


def test_password_change_rejected_by_store(client, fake_store, admin_headers):
    fake_store.on("PUT", "/profile/password", {"message": "Current password is incorrect"}, status=400)
    resp = client.put("/settings/password", json={
        "current_password": "wrong", "new_password": "secret1", "confirm_password": "secret1",
    }, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Current password is incorrect"
