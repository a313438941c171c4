import os
import base64
import logging
from datetime import date
from typing import Optional, List, Dict, Any

from fastapi import FastAPI, HTTPException, Depends, Query, Request, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from config import (
    STORE_NAME, STORE_API_URL, SESSION_TTL_HOURS, ALLOWED_ORIGINS, LOG_LEVEL,
    MAX_IMAGE_BYTES, MIN_PASSWORD_LENGTH,
)
from schemas import (
    LoginDTO, OrderStatusDTO, PaymentStatusDTO, TrackingDTO, ProductDTO, UserRoleDTO, NotifyUsersDTO,
    ReviewReplyDTO, ReviewStatus, MessageStatusDTO, MessageReplyDTO, SettingsDTO, PasswordChangeDTO,
    NotificationPreferences, Order, ORDER_STATUSES, PAYMENT_STATUSES, PRODUCT_CATEGORIES,
)
from store_api import StoreAPI, StoreAPIError, unwrap_list
from admin_auth import AdminSession, get_admin_session, login_admin, revoke_session
from mappers import map_order, map_product, map_user, map_review, map_message, tracking_form
from timeline import build_timeline, format_status, is_valid_status
from filters import (
    filter_orders, order_stats, filter_products, stock_label, filter_users, filter_reviews, review_stats,
    filter_messages, message_stats,
)
from exports import users_csv, users_export_filename
from notifications import FEED_FILTERS, NotificationCenter, build_feed, filter_feed
from settings_store import SettingsStore
from dashboard import compute_stats, recent_orders, recent_reviews

# Logging
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("atlas_admin")

app = FastAPI(title=f"{STORE_NAME} Admin Console", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in ALLOWED_ORIGINS] if ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

PANEL_TABS = [
    {"id": "dashboard", "label": "Dashboard"},
    {"id": "orders", "label": "Orders"},
    {"id": "products", "label": "Products"},
    {"id": "users", "label": "Users"},
    {"id": "reviews", "label": "Reviews"},
    {"id": "messages", "label": "Messages"},
    {"id": "notifications", "label": "Notifications"},
    {"id": "settings", "label": "Settings"},
]

_store = StoreAPI()
_notification_center = NotificationCenter()
_settings_store = SettingsStore()


# Dependencies
def get_store_api() -> StoreAPI:
    return _store


def get_notification_center() -> NotificationCenter:
    return _notification_center


def get_settings_store() -> SettingsStore:
    return _settings_store


def get_admin_api(session: AdminSession = Depends(get_admin_session),
                  store: StoreAPI = Depends(get_store_api)) -> StoreAPI:
    return store.with_token(session.store_token)


def store_failure(exc: StoreAPIError, message: str, prefer_store_message: bool = False) -> HTTPException:
    logger.warning("%s: %s", message, exc)
    status_code = exc.status_code if exc.status_code in (400, 401, 403, 404, 409, 422) else 502
    detail = exc.store_message if prefer_store_message and exc.store_message else message
    return HTTPException(status_code=status_code, detail=detail)


def fetch_or_empty(api: StoreAPI, path: str, key: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Fetch a record list for an overview screen; a failing source contributes nothing."""
    try:
        return unwrap_list(api.get(path, params=params), key)
    except StoreAPIError as exc:
        logger.warning("Could not load %s: %s", path, exc)
        return []


def _unwrap_one(data: Any, key: str) -> Dict[str, Any]:
    if isinstance(data, dict) and isinstance(data.get(key), dict):
        return data[key]
    return data if isinstance(data, dict) else {}


def find_record(api: StoreAPI, path: str, key: str, record_id: str, failure: str, missing: str) -> Dict[str, Any]:
    """Pick one record out of a store list endpoint; the store exposes no per-id reads for these."""
    try:
        data = api.get(path)
    except StoreAPIError as exc:
        raise store_failure(exc, failure)
    for doc in unwrap_list(data, key):
        if str(doc.get("_id") or doc.get("id") or "") == record_id:
            return doc
    raise HTTPException(status_code=404, detail=missing)


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Health and config
@app.get("/")
def root():
    return {"name": f"{STORE_NAME} Admin", "status": "ok"}


@app.get("/config")
def get_config():
    return {
        "storeName": STORE_NAME,
        "storeApi": STORE_API_URL,
        "sessionTtlHours": SESSION_TTL_HOURS,
        "orderStatuses": ORDER_STATUSES,
        "paymentStatuses": PAYMENT_STATUSES,
        "productCategories": PRODUCT_CATEGORIES,
    }


# Auth
@app.post("/auth/login")
def login(data: LoginDTO, store: StoreAPI = Depends(get_store_api)):
    try:
        result = login_admin(store, data.email, data.password)
    except StoreAPIError as exc:
        raise store_failure(exc, "Login failed. Please check your credentials.", prefer_store_message=True)
    logger.info("Admin %s logged in", data.email)
    return {**result, "message": "Welcome to Admin Panel!"}


@app.get("/auth/session")
def current_session(session: AdminSession = Depends(get_admin_session)):
    return {
        "name": session.name,
        "email": session.email,
        "role": session.role,
        "loginTime": session.login_time.isoformat(),
    }


@app.post("/auth/logout")
def logout(session: AdminSession = Depends(get_admin_session)):
    revoke_session(session)
    logger.info("Admin %s logged out", session.email)
    return {"ok": True, "message": "Logged out successfully!"}


@app.get("/panel/tabs")
def panel_tabs(session: AdminSession = Depends(get_admin_session)):
    return {"tabs": PANEL_TABS, "admin": {"name": session.name, "email": session.email}}


# Dashboard
@app.get("/dashboard")
def dashboard(api: StoreAPI = Depends(get_admin_api)):
    orders = fetch_or_empty(api, "/admin/orders", "orders", params={"limit": 100})
    users = fetch_or_empty(api, "/admin/users", "users")
    products = fetch_or_empty(api, "/products", "products")
    reviews = fetch_or_empty(api, "/reviews", "reviews")
    return {
        "stats": compute_stats(orders, users, products),
        "recentOrders": recent_orders(orders),
        "recentReviews": recent_reviews(reviews),
    }


# Orders
@app.get("/orders")
def list_orders(search: str = "", status: str = "all", payment: str = "all",
                api: StoreAPI = Depends(get_admin_api)):
    if status != "all" and not is_valid_status(status):
        raise HTTPException(status_code=400, detail=f"Unknown order status '{status}'")
    params = {"status": status} if status != "all" else None
    try:
        data = api.get("/admin/orders", params=params)
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to load orders")
    orders = [map_order(o) for o in unwrap_list(data, "orders")]
    return {
        "orders": filter_orders(orders, search, payment),
        "stats": order_stats(orders),
        "statusOptions": ORDER_STATUSES,
        "paymentStatusOptions": PAYMENT_STATUSES,
        "statusLabels": {s: format_status(s) for s in ORDER_STATUSES},
    }


@app.get("/orders/{order_id}")
def get_order(order_id: str, api: StoreAPI = Depends(get_admin_api)):
    try:
        data = api.get(f"/admin/orders/{order_id}")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to load order")
    order = map_order(_unwrap_one(data, "order"))
    return {
        "order": order,
        "timeline": build_timeline(order.status, order.tracking, order.order_date),
        "trackingForm": tracking_form(order),
    }


@app.get("/orders/{order_id}/timeline")
def get_order_timeline(order_id: str, compact: bool = False, api: StoreAPI = Depends(get_admin_api)):
    try:
        data = api.get(f"/admin/orders/{order_id}")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to load order")
    order = map_order(_unwrap_one(data, "order"))
    return build_timeline(order.status, order.tracking, order.order_date, compact=compact)


def _patched_order(resp: Any) -> Optional[Order]:
    doc = _unwrap_one(resp, "order")
    return map_order(doc) if doc.get("_id") or doc.get("orderNumber") else None


@app.put("/orders/{order_id}/status")
def update_order_status(order_id: str, data: OrderStatusDTO, api: StoreAPI = Depends(get_admin_api)):
    try:
        resp = api.put(f"/admin/orders/{order_id}", json={"status": data.status})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to update order status")
    logger.info("Order %s status -> %s", order_id, data.status)
    return {
        "ok": True,
        "id": order_id,
        "status": data.status,
        "order": _patched_order(resp),
        "timeline": build_timeline(data.status),
        "message": f"Order status updated to {format_status(data.status)}",
    }


@app.put("/orders/{order_id}/payment-status")
def update_payment_status(order_id: str, data: PaymentStatusDTO, api: StoreAPI = Depends(get_admin_api)):
    try:
        resp = api.put(f"/admin/orders/{order_id}", json={"paymentStatus": data.payment_status})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to update payment status")
    logger.info("Order %s payment status -> %s", order_id, data.payment_status)
    return {
        "ok": True,
        "id": order_id,
        "payment_status": data.payment_status,
        "order": _patched_order(resp),
        "message": f"Payment status updated for order {order_id}",
    }


@app.put("/orders/{order_id}/tracking")
def update_tracking(order_id: str, data: TrackingDTO, api: StoreAPI = Depends(get_admin_api)):
    tracking = {
        "carrier": data.carrier,
        "currentLocation": data.current_location,
        "estimatedDelivery": data.estimated_delivery.isoformat() if data.estimated_delivery else None,
    }
    try:
        resp = api.put(f"/admin/orders/{order_id}", json={"tracking": tracking})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to update tracking")
    logger.info("Order %s tracking updated", order_id)
    return {
        "ok": True,
        "id": order_id,
        "tracking": tracking,
        "order": _patched_order(resp),
        "message": "Tracking information updated",
    }


# Products
@app.get("/products")
def list_products(search: str = "", category: str = "all", status: str = "all",
                  api: StoreAPI = Depends(get_admin_api)):
    try:
        data = api.get("/admin/products")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to load products")
    products = [map_product(p) for p in unwrap_list(data, "products")]
    return {
        "products": [
            {**p.model_dump(), "stock_label": stock_label(p)}
            for p in filter_products(products, search, category, status)
        ],
        "total": len(products),
        "categories": PRODUCT_CATEGORIES,
    }


@app.post("/products")
def create_product(data: ProductDTO, api: StoreAPI = Depends(get_admin_api)):
    try:
        resp = api.post("/admin/products", json=data.to_store_payload())
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to save product", prefer_store_message=True)
    product = _unwrap_one(resp, "product")
    logger.info("Product %s created", data.name)
    return {
        "ok": True,
        "product": map_product(product) if product.get("_id") else None,
        "message": "Product added successfully!",
    }


@app.put("/products/{product_id}")
def update_product(product_id: str, data: ProductDTO, api: StoreAPI = Depends(get_admin_api)):
    try:
        api.put(f"/admin/products/{product_id}", json=data.to_store_payload())
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to save product", prefer_store_message=True)
    logger.info("Product %s updated", product_id)
    return {"ok": True, "id": product_id, "message": "Product updated successfully!"}


@app.delete("/products/{product_id}")
def delete_product(product_id: str, api: StoreAPI = Depends(get_admin_api)):
    try:
        api.delete(f"/admin/products/{product_id}")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to delete product")
    logger.info("Product %s deleted", product_id)
    return {"ok": True, "id": product_id, "message": "Product deleted successfully!"}


@app.post("/products/{product_id}/featured")
def toggle_featured(product_id: str, api: StoreAPI = Depends(get_admin_api)):
    product = map_product(find_record(api, "/admin/products", "products", product_id,
                                      "Failed to update product", "Product not found"))
    featured = not product.featured
    try:
        api.put(f"/admin/products/{product_id}", json={"featured": featured})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to update product")
    return {"ok": True, "id": product_id, "featured": featured, "message": "Product updated!"}


@app.post("/products/images")
async def upload_product_image(file: UploadFile = File(...), session: AdminSession = Depends(get_admin_session)):
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Please select an image file")
    content = await file.read()
    if len(content) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=400,
                            detail=f"Image size should be less than {MAX_IMAGE_BYTES // (1024 * 1024)}MB")
    encoded = base64.b64encode(content).decode()
    return {"image": f"data:{file.content_type};base64,{encoded}", "size": len(content)}


# Users
def _load_users(api: StoreAPI):
    try:
        data = api.get("/admin/users")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to fetch users")
    return [map_user(u) for u in unwrap_list(data, "users")]


@app.get("/users")
def list_users(search: str = "", role: str = "all", status: str = "all", api: StoreAPI = Depends(get_admin_api)):
    users = _load_users(api)
    orders = fetch_or_empty(api, "/admin/orders", "orders")
    return {
        "users": filter_users(users, search, role, status),
        "total": len(users),
        "totalRevenue": sum(o.get("total") or 0 for o in orders),
    }


@app.put("/users/{user_id}/status")
def toggle_user_status(user_id: str, api: StoreAPI = Depends(get_admin_api)):
    user = map_user(find_record(api, "/admin/users", "users", user_id, "Failed to update status", "User not found"))
    new_status = "inactive" if user.status == "active" else "active"
    try:
        api.put(f"/admin/users/{user_id}", json={"isActive": new_status == "active"})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to update status")
    logger.info("User %s -> %s", user_id, new_status)
    return {"ok": True, "id": user_id, "status": new_status, "message": "User status updated!"}


@app.put("/users/{user_id}/role")
def change_user_role(user_id: str, data: UserRoleDTO, api: StoreAPI = Depends(get_admin_api)):
    try:
        api.put(f"/admin/users/{user_id}", json={"role": data.role})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to update role")
    logger.info("User %s role -> %s", user_id, data.role)
    return {"ok": True, "id": user_id, "role": data.role, "message": "User role updated!"}


@app.delete("/users/{user_id}")
def delete_user(user_id: str, api: StoreAPI = Depends(get_admin_api)):
    try:
        api.delete(f"/admin/users/{user_id}")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to delete user")
    logger.info("User %s deleted", user_id)
    return {"ok": True, "id": user_id, "message": "User deleted successfully!"}


@app.get("/users/export")
def export_users(search: str = "", role: str = "all", status: str = "all", api: StoreAPI = Depends(get_admin_api)):
    users = filter_users(_load_users(api), search, role, status)
    filename = users_export_filename(date.today())
    return Response(
        content=users_csv(users),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/users/notify")
def notify_users(data: NotifyUsersDTO, api: StoreAPI = Depends(get_admin_api)):
    if not data.subject.strip() or not data.message.strip():
        raise HTTPException(status_code=400, detail="Please fill in subject and message")
    recipients = [u.id for u in filter_users(_load_users(api), data.search, data.role, data.status)]
    try:
        api.post("/admin/notifications/send", json={
            "subject": data.subject,
            "message": data.message,
            "recipients": recipients,
        })
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to send notification")
    logger.info("Notification sent to %d users", len(recipients))
    return {"ok": True, "recipients": len(recipients), "message": f"Notification sent to {len(recipients)} users!"}


# Reviews
@app.get("/reviews")
def list_reviews(search: str = "", rating: str = "all", status: str = "all", api: StoreAPI = Depends(get_admin_api)):
    if rating != "all" and not rating.isdigit():
        raise HTTPException(status_code=400, detail="Rating filter must be 'all' or 1-5")
    try:
        data = api.get("/reviews")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to load reviews")
    reviews = [map_review(r, i) for i, r in enumerate(unwrap_list(data, "reviews"))]
    return {
        "reviews": filter_reviews(reviews, search, rating, status),
        "stats": review_stats(reviews),
    }


def _set_review_status(api: StoreAPI, product_id: str, review_id: str, status: ReviewStatus):
    try:
        api.put(f"/admin/reviews/{product_id}/{review_id}/status", json={"status": status})
    except StoreAPIError as exc:
        verb = "approve" if status == "approved" else "reject"
        raise store_failure(exc, f"Failed to {verb} review")
    logger.info("Review %s -> %s", review_id, status)
    return {"ok": True, "id": review_id, "status": status}


@app.put("/reviews/{product_id}/{review_id}/approve")
def approve_review(product_id: str, review_id: str, api: StoreAPI = Depends(get_admin_api)):
    return _set_review_status(api, product_id, review_id, "approved")


@app.put("/reviews/{product_id}/{review_id}/reject")
def reject_review(product_id: str, review_id: str, api: StoreAPI = Depends(get_admin_api)):
    return _set_review_status(api, product_id, review_id, "rejected")


@app.post("/reviews/{product_id}/{review_id}/reply")
def reply_to_review(product_id: str, review_id: str, data: ReviewReplyDTO, api: StoreAPI = Depends(get_admin_api)):
    if not data.reply.strip():
        raise HTTPException(status_code=400, detail="Please enter a reply")
    try:
        api.post(f"/admin/reviews/{product_id}/{review_id}/reply", json={"reply": data.reply})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to send reply")
    return {
        "ok": True,
        "id": review_id,
        "reply": {"text": data.reply, "date": date.today().isoformat(), "by": "Admin"},
        "message": "Reply sent! User will be notified.",
    }


@app.delete("/reviews/{product_id}/{review_id}")
def delete_review(product_id: str, review_id: str, api: StoreAPI = Depends(get_admin_api)):
    try:
        api.delete(f"/admin/reviews/{product_id}/{review_id}")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to delete review")
    return {"ok": True, "id": review_id}


# Contact messages
@app.get("/messages")
def list_messages(search: str = "", status: str = "all", api: StoreAPI = Depends(get_admin_api)):
    try:
        data = api.get("/admin/messages")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to load messages")
    messages = [map_message(m) for m in unwrap_list(data, "messages")]
    return {"messages": filter_messages(messages, search, status), "stats": message_stats(messages)}


@app.put("/messages/{message_id}/status")
def update_message_status(message_id: str, data: MessageStatusDTO, api: StoreAPI = Depends(get_admin_api)):
    try:
        api.put(f"/admin/messages/{message_id}", json={"status": data.status})
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to update message")
    return {"ok": True, "id": message_id, "status": data.status, "message": f"Message marked as {data.status}"}


@app.delete("/messages/{message_id}")
def delete_message(message_id: str, api: StoreAPI = Depends(get_admin_api)):
    try:
        api.delete(f"/admin/messages/{message_id}")
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to delete message")
    return {"ok": True, "id": message_id, "message": "Message deleted"}


@app.post("/messages/{message_id}/reply")
def reply_to_message(message_id: str, data: MessageReplyDTO, api: StoreAPI = Depends(get_admin_api)):
    if not data.reply_text.strip():
        raise HTTPException(status_code=400, detail="Please enter a reply message")
    msg = map_message(find_record(api, "/admin/messages", "messages", message_id,
                                  "Failed to send reply", "Message not found"))
    try:
        api.post("/admin/messages/reply", json={
            "messageId": message_id,
            "to": msg.email,
            "name": msg.name,
            "subject": f"Re: {msg.subject}",
            "replyText": data.reply_text,
        })
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to send reply", prefer_store_message=True)
    try:
        api.put(f"/admin/messages/{message_id}", json={"status": "replied"})
        status = "replied"
    except StoreAPIError as exc:
        logger.warning("Reply sent but message %s not marked replied: %s", message_id, exc)
        status = msg.status
    logger.info("Replied to message %s", message_id)
    return {"ok": True, "id": message_id, "status": status, "message": "Reply sent successfully!"}


# Notifications
def _current_feed(api: StoreAPI, session: AdminSession, center: NotificationCenter):
    feed = build_feed(
        orders=fetch_or_empty(api, "/admin/orders", "orders", params={"limit": 5}),
        users=fetch_or_empty(api, "/admin/users", "users", params={"limit": 5}),
        messages=fetch_or_empty(api, "/admin/messages", "messages"),
        products=fetch_or_empty(api, "/admin/products", "products"),
        reviews=fetch_or_empty(api, "/reviews", "reviews"),
    )
    return center.apply(session.email, feed)


@app.get("/notifications")
def list_notifications(kind: str = Query("all", alias="filter"), api: StoreAPI = Depends(get_admin_api),
                       session: AdminSession = Depends(get_admin_session),
                       center: NotificationCenter = Depends(get_notification_center)):
    if kind not in FEED_FILTERS:
        raise HTTPException(status_code=400, detail=f"Unknown filter '{kind}'")
    feed = _current_feed(api, session, center)
    return {
        "notifications": filter_feed(feed, kind),
        "unreadCount": sum(1 for n in feed if not n.read),
        "filters": FEED_FILTERS,
    }


@app.post("/notifications/read-all")
def mark_all_notifications_read(api: StoreAPI = Depends(get_admin_api),
                                session: AdminSession = Depends(get_admin_session),
                                center: NotificationCenter = Depends(get_notification_center)):
    center.mark_read(session.email, [n.id for n in _current_feed(api, session, center)])
    return {"ok": True}


@app.post("/notifications/{notification_id}/read")
def mark_notification_read(notification_id: str, session: AdminSession = Depends(get_admin_session),
                           center: NotificationCenter = Depends(get_notification_center)):
    center.mark_read(session.email, [notification_id])
    return {"ok": True, "id": notification_id}


@app.get("/notifications/preferences")
def get_notification_preferences(session: AdminSession = Depends(get_admin_session),
                                 center: NotificationCenter = Depends(get_notification_center)):
    return center.preferences(session.email)


@app.put("/notifications/preferences")
def set_notification_preferences(data: NotificationPreferences, session: AdminSession = Depends(get_admin_session),
                                 center: NotificationCenter = Depends(get_notification_center)):
    center.set_preferences(session.email, data)
    return data


@app.delete("/notifications/{notification_id}")
def dismiss_notification(notification_id: str, session: AdminSession = Depends(get_admin_session),
                         center: NotificationCenter = Depends(get_notification_center)):
    center.dismiss(session.email, [notification_id])
    return {"ok": True, "id": notification_id}


@app.delete("/notifications")
def clear_notifications(api: StoreAPI = Depends(get_admin_api),
                        session: AdminSession = Depends(get_admin_session),
                        center: NotificationCenter = Depends(get_notification_center)):
    center.dismiss(session.email, [n.id for n in _current_feed(api, session, center)])
    return {"ok": True}


# Settings
@app.get("/settings")
def get_settings(api: StoreAPI = Depends(get_admin_api), settings: SettingsStore = Depends(get_settings_store)):
    current, source = settings.load(api)
    return {"settings": current, "source": source}


@app.put("/settings")
def save_settings(data: SettingsDTO, api: StoreAPI = Depends(get_admin_api),
                  settings: SettingsStore = Depends(get_settings_store)):
    saved, remote = settings.save(api, data)
    return {
        "ok": True,
        "settings": saved,
        "savedToStore": remote,
        "message": "Settings saved successfully!" if remote else "Settings saved locally!",
    }


@app.put("/settings/password")
def change_password(data: PasswordChangeDTO, api: StoreAPI = Depends(get_admin_api)):
    if not data.current_password or not data.new_password or not data.confirm_password:
        raise HTTPException(status_code=400, detail="Please fill all password fields")
    if data.new_password != data.confirm_password:
        raise HTTPException(status_code=400, detail="New passwords do not match")
    if len(data.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    try:
        api.put("/profile/password", json={
            "currentPassword": data.current_password,
            "newPassword": data.new_password,
        })
    except StoreAPIError as exc:
        raise store_failure(exc, "Failed to change password", prefer_store_message=True)
    return {"ok": True, "message": "Password changed successfully!"}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
