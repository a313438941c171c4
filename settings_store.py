import logging
import threading
from typing import Any, Dict, Tuple

from schemas import Settings, SettingsDTO
from store_api import StoreAPI, StoreAPIError

logger = logging.getLogger("atlas_admin")

GROUPS = ("storeSettings", "notificationSettings", "paymentSettings", "shippingSettings")


class SettingsStore:
    """Store settings with a local copy that survives store API outages.

    The copy is updated on every save, whether or not the store accepted it,
    and serves reads when the store cannot be reached.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._local = Settings()

    @property
    def local(self) -> Settings:
        with self._lock:
            return self._local.model_copy(deep=True)

    def merge(self, update: SettingsDTO) -> Settings:
        current = self.local
        changes = {g: getattr(update, g) for g in GROUPS if getattr(update, g) is not None}
        return current.model_copy(update=changes)

    def load(self, store: StoreAPI) -> Tuple[Settings, str]:
        try:
            data = store.get("/admin/settings")
        except StoreAPIError:
            logger.warning("Falling back to local settings copy")
            return self.local, "local"
        remote: Dict[str, Any] = data.get("settings", data) if isinstance(data, dict) else {}
        merged = self.local.model_dump()
        for group in GROUPS:
            if isinstance(remote.get(group), dict):
                merged[group].update(remote[group])
        settings = Settings.model_validate(merged)
        with self._lock:
            self._local = settings
        return settings, "store"

    def save(self, store: StoreAPI, update: SettingsDTO) -> Tuple[Settings, bool]:
        settings = self.merge(update)
        with self._lock:
            self._local = settings
        try:
            store.put("/admin/settings", json=settings.model_dump())
        except StoreAPIError as exc:
            logger.warning("Settings kept locally, store rejected them: %s", exc)
            return settings, False
        return settings, True
