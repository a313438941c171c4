"""
Store API access

Every entity the console shows is owned by the store's REST API. This module
is the only place that talks to it: one ``httpx.Client`` per process, a bearer
token attached per request, and a single error type for every failure.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from config import STORE_API_URL, STORE_API_TIMEOUT

logger = logging.getLogger("atlas_admin")


class StoreAPIError(Exception):
    """The store API could not be reached or answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None, store_message: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.store_message = store_message


class StoreAPI:
    def __init__(self, base_url: str = STORE_API_URL, token: Optional[str] = None,
                 timeout: float = STORE_API_TIMEOUT, transport: Optional[httpx.BaseTransport] = None,
                 client: Optional[httpx.Client] = None):
        self.token = token
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def with_token(self, token: Optional[str]) -> "StoreAPI":
        return StoreAPI(token=token, client=self._client)

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Optional[Any] = None) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            resp = self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Store API %s %s unreachable: %s", method, path, exc)
            raise StoreAPIError(f"Store API unreachable: {exc}") from exc
        if resp.is_error:
            store_message = None
            try:
                body = resp.json()
                if isinstance(body, dict):
                    store_message = body.get("message") or body.get("detail")
            except ValueError:
                pass
            logger.warning("Store API %s %s failed with %s", method, path, resp.status_code)
            raise StoreAPIError(f"Store API returned {resp.status_code}", resp.status_code, store_message)
        if not resp.content:
            return {}
        return resp.json()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[Any] = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Optional[Any] = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def unwrap_list(data: Any, key: str) -> list:
    """Return the record list whether the store wrapped it under ``key`` or not."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        items = data.get(key)
        if isinstance(items, list):
            return items
    return []
