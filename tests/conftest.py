import json

import httpx
import pytest
from fastapi.testclient import TestClient

import main
from admin_auth import create_session_token
from notifications import NotificationCenter
from settings_store import SettingsStore
from store_api import StoreAPI

STORE_URL = "http://store.test"


class FakeStore:
    """Answers store API calls with canned responses and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, method, path, body=None, status=200):
        self.routes[(method, path)] = (status, body if body is not None else {})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append({
            "method": request.method,
            "path": request.url.path,
            "params": dict(request.url.params),
            "json": json.loads(request.content) if request.content else None,
            "auth": request.headers.get("authorization"),
        })
        status, body = self.routes.get((request.method, request.url.path), (404, {"message": "Not found"}))
        return httpx.Response(status, json=body)

    def called(self, method, path):
        return [c for c in self.calls if c["method"] == method and c["path"] == path]


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def store_api(fake_store):
    return StoreAPI(base_url=STORE_URL, transport=httpx.MockTransport(fake_store.handler))


@pytest.fixture
def client(store_api):
    main.app.dependency_overrides[main.get_store_api] = lambda: store_api
    center = NotificationCenter()
    settings = SettingsStore()
    main.app.dependency_overrides[main.get_notification_center] = lambda: center
    main.app.dependency_overrides[main.get_settings_store] = lambda: settings
    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_session_token({"email": "admin@atlas.com", "fullname": "Admin", "role": "admin"}, "store-token")
    return {"Authorization": f"Bearer {token}"}
