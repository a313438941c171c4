"""
Admin notification feed

The feed is derived on every request from the latest orders, registrations,
contact messages, stock levels and pending reviews. Read and dismissed marks
are kept per admin in process memory; they reset when the console restarts.
"""
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from config import DASHBOARD_LOW_STOCK
from exports import format_date
from schemas import Notification, NotificationPreferences

FEED_FILTERS = ["all", "unread", "order", "stock", "user", "review", "message"]

# preference toggle -> notification type
PREFERENCE_TYPES = {
    "orders": "order",
    "stock": "stock",
    "users": "user",
    "reviews": "review",
    "messages": "message",
    "system": "system",
}

# read/dismiss marks kept per admin; the oldest are forgotten first
MAX_MARKS = 500


def parse_timestamp(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def time_ago(value: Optional[str], now: Optional[datetime] = None) -> str:
    if not value:
        return "Recently"
    then = parse_timestamp(value)
    if then is None:
        return "Recently"
    now = now or datetime.now(timezone.utc)
    seconds = (now - then).total_seconds()
    mins = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)
    if mins < 1:
        return "Just now"
    if mins < 60:
        return f"{mins} minute{'s' if mins > 1 else ''} ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if days < 7:
        return f"{days} day{'s' if days > 1 else ''} ago"
    return format_date(value)


def _short_id(doc: Dict[str, Any]) -> str:
    raw = str(doc.get("_id") or "")
    return raw[-8:].upper() if raw else "N/A"


def build_feed(orders: Iterable[Dict[str, Any]], users: Iterable[Dict[str, Any]],
               messages: Iterable[Dict[str, Any]], products: Iterable[Dict[str, Any]] = (),
               reviews: Iterable[Dict[str, Any]] = (), now: Optional[datetime] = None) -> List[Notification]:
    feed: List[Notification] = []

    for order in list(orders)[:3]:
        is_new = order.get("status") == "processing"
        feed.append(Notification(
            id=f"order:{order.get('_id')}",
            type="order",
            title="New Order Received" if is_new else f"Order {order.get('status')}",
            message=f"Order #{_short_id(order)} - ₹{order.get('total') or 0:,}",
            time=time_ago(order.get("createdAt"), now),
            read=not is_new,
            priority="high" if is_new else "low",
        ))

    for user in list(users)[:3]:
        if user.get("role") == "admin":
            continue
        feed.append(Notification(
            id=f"user:{user.get('_id')}",
            type="user",
            title="New User Registration",
            message=f"{user.get('fullname') or user.get('email')} has registered",
            time=time_ago(user.get("createdAt"), now),
            read=True,
            priority="medium",
        ))

    for msg in list(messages)[:2]:
        body = msg.get("message") or ""
        feed.append(Notification(
            id=f"message:{msg.get('_id')}",
            type="message",
            title="New Contact Message",
            message=f"{msg.get('name')}: {msg.get('subject') or body[:30] + '...'}",
            time=time_ago(msg.get("createdAt"), now),
            read=(msg.get("status") or "new") != "new",
            priority="medium",
        ))

    low_stock = [p for p in products if (p.get("stock") or 0) < DASHBOARD_LOW_STOCK]
    for product in low_stock[:3]:
        stock = product.get("stock") or 0
        feed.append(Notification(
            id=f"stock:{product.get('_id')}",
            type="stock",
            title="Out of Stock" if stock == 0 else "Low Stock Alert",
            message=f"{product.get('name')} has {stock} unit{'s' if stock != 1 else ''} left",
            time=time_ago(product.get("updatedAt"), now),
            read=False,
            priority="high" if stock == 0 else "medium",
        ))

    pending = [r for r in reviews if r.get("status") == "pending"]
    for review in pending[:3]:
        product = review.get("product") if isinstance(review.get("product"), dict) else {}
        feed.append(Notification(
            id=f"review:{review.get('_id')}",
            type="review",
            title="Review Awaiting Moderation",
            message=f"{review.get('rating') or 5}★ on {product.get('name') or review.get('productName') or 'Product'}",
            time=time_ago(review.get("createdAt"), now),
            read=False,
            priority="medium",
        ))

    if not feed:
        feed.append(Notification(
            id="system:all-caught-up",
            type="system",
            title="All Caught Up!",
            message="No new notifications at this time",
            time="Just now",
            read=True,
            priority="low",
        ))
    return feed


def filter_feed(feed: List[Notification], kind: str = "all") -> List[Notification]:
    if kind == "all":
        return list(feed)
    if kind == "unread":
        return [n for n in feed if not n.read]
    return [n for n in feed if n.type == kind]


class NotificationCenter:
    """Per-admin read/dismiss marks and notification preferences."""

    def __init__(self):
        self._lock = threading.Lock()
        self._read: Dict[str, Dict[str, None]] = {}
        self._dismissed: Dict[str, Dict[str, None]] = {}
        self._prefs: Dict[str, NotificationPreferences] = {}

    def preferences(self, admin: str) -> NotificationPreferences:
        with self._lock:
            return self._prefs.get(admin) or NotificationPreferences()

    def set_preferences(self, admin: str, prefs: NotificationPreferences):
        with self._lock:
            self._prefs[admin] = prefs

    def apply(self, admin: str, feed: List[Notification]) -> List[Notification]:
        prefs = self.preferences(admin)
        enabled = {kind for key, kind in PREFERENCE_TYPES.items() if getattr(prefs, key)}
        with self._lock:
            read = set(self._read.get(admin, ()))
            dismissed = set(self._dismissed.get(admin, ()))
        result = []
        for n in feed:
            if n.id in dismissed or n.type not in enabled:
                continue
            result.append(n.model_copy(update={"read": True}) if n.id in read else n)
        return result

    def mark_read(self, admin: str, ids: Iterable[str]):
        with self._lock:
            _remember(self._read.setdefault(admin, {}), ids)

    def dismiss(self, admin: str, ids: Iterable[str]):
        with self._lock:
            _remember(self._dismissed.setdefault(admin, {}), ids)


def _remember(marks: Dict[str, None], ids: Iterable[str]):
    for notification_id in ids:
        marks.pop(notification_id, None)
        marks[notification_id] = None
    while len(marks) > MAX_MARKS:
        del marks[next(iter(marks))]
