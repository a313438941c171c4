"""Normalise store API records into the console's view records."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config import DEFAULT_CARRIER
from schemas import (
    Customer, Order, OrderLine, Tracking, Product, Specification, User, UserPreferences,
    Review, ReviewReply, Message, INQUIRY_LABELS,
)


def _id(doc: Dict[str, Any]) -> str:
    return str(doc.get("_id") or doc.get("id") or "")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def map_tracking(raw: Optional[Dict[str, Any]]) -> Tracking:
    raw = raw or {}
    return Tracking(
        carrier=raw.get("carrier"),
        current_location=raw.get("currentLocation"),
        estimated_delivery=raw.get("estimatedDelivery"),
    )


def map_order(doc: Dict[str, Any]) -> Order:
    user = doc.get("user") or {}
    shipping = doc.get("shippingAddress") or {}
    return Order(
        id=str(doc.get("orderNumber") or _id(doc)),
        db_id=_id(doc),
        customer=Customer(
            name=user.get("fullname") or shipping.get("fullname") or "Customer",
            email=user.get("email") or "N/A",
            phone=user.get("phone") or shipping.get("phone") or "N/A",
            registered_address=user.get("address") or None,
        ),
        items=[
            OrderLine(name=i.get("name", ""), quantity=i.get("quantity", 1), price=i.get("price", 0))
            for i in doc.get("items", [])
        ],
        status=doc.get("status") or "processing",
        payment_status=doc.get("paymentStatus") or "pending",
        payment_method=doc.get("paymentMethod"),
        transaction_id=doc.get("transactionId") or "",
        total=doc.get("total") or 0,
        shipping_address=shipping or user.get("address") or {},
        order_date=doc.get("createdAt"),
        tracking=map_tracking(doc.get("tracking")),
    )


def tracking_form(order: Order) -> Dict[str, str]:
    """Initial values of the tracking form for an order's detail view."""
    eta = order.tracking.estimated_delivery or ""
    return {
        "current_location": order.tracking.current_location or "",
        "carrier": order.tracking.carrier or DEFAULT_CARRIER,
        "estimated_delivery": eta.split("T")[0],
    }


def map_product(doc: Dict[str, Any]) -> Product:
    stock = doc.get("stock") or 0
    reviews = doc.get("reviews")
    specs = []
    for s in doc.get("specifications") or []:
        if isinstance(s, dict):
            specs.append(Specification(key=str(s.get("key", "")), value=str(s.get("value", ""))))
    return Product(
        id=_id(doc),
        name=doc.get("name", ""),
        description=doc.get("description") or "",
        category=doc.get("category") or "",
        price=doc.get("price") or 0,
        original_price=doc.get("originalPrice"),
        stock=stock,
        sold=doc.get("sold") or 0,
        status="active" if stock > 0 else "inactive",
        featured=bool(doc.get("featured")),
        images=doc.get("images") or [],
        specifications=specs,
        features=doc.get("features") or [],
        brand=doc.get("brand") or "",
        warranty=doc.get("warranty") or "",
        rating=doc.get("rating") or 0,
        num_reviews=doc.get("numReviews") or (len(reviews) if isinstance(reviews, list) else 0),
        created_at=doc.get("createdAt"),
    )


def map_user(doc: Dict[str, Any]) -> User:
    name = doc.get("fullname") or doc.get("username") or "Unknown User"
    prefs = doc.get("preferences") or {}
    registered = doc.get("createdAt") or _now_iso()
    return User(
        id=_id(doc),
        name=name,
        email=doc.get("email") or "",
        phone=doc.get("phone") or "Not provided",
        role=doc.get("role") or "customer",
        status="inactive" if doc.get("isActive") is False else "active",
        registered_at=registered,
        last_active=doc.get("lastLogin") or registered,
        total_orders=doc.get("orderCount") or 0,
        total_spent=doc.get("totalSpent") or 0,
        avatar=doc.get("avatar"),
        avatar_letter=(doc.get("fullname") or doc.get("username") or "U")[0].upper(),
        address=doc.get("address") or {"street": "", "city": "", "state": "", "pincode": ""},
        preferences=UserPreferences(
            newsletter=bool(prefs.get("newsletter")),
            sms=bool(prefs.get("sms")),
            promotions=bool(prefs.get("promotions")),
        ),
    )


def _star_rating(value: Any) -> int:
    try:
        stars = int(float(value) + 0.5)
    except (TypeError, ValueError, OverflowError):
        return 5
    return min(5, max(1, stars)) if stars else 5


def _review_reply(reply: Any, doc: Dict[str, Any]) -> Optional[ReviewReply]:
    if not isinstance(reply, dict):
        return None
    return ReviewReply(
        text=str(reply.get("text") or reply.get("reply") or ""),
        date=str(reply.get("date") or reply.get("createdAt") or doc.get("updatedAt") or ""),
        by=str(reply.get("by") or "Admin"),
    )


def map_review(doc: Dict[str, Any], position: int = 0) -> Review:
    product = doc.get("product") if isinstance(doc.get("product"), dict) else {}
    user = doc.get("user") if isinstance(doc.get("user"), dict) else {}
    images = product.get("images") or []
    reply = doc.get("reply")
    if isinstance(reply, str):
        reply = {"text": reply}
    return Review(
        id=_id(doc) or str(position + 1),
        product_id=product.get("_id") or doc.get("productId"),
        product_name=product.get("name") or doc.get("productName") or "Product",
        product_image=doc.get("productImage") or (images[0] if images else "/logo.png"),
        user_id=user.get("_id") or doc.get("userId"),
        user_name=user.get("fullname") or doc.get("userName") or "Anonymous",
        user_email=user.get("email") or doc.get("userEmail") or "",
        rating=_star_rating(doc.get("rating")),
        title=doc.get("title") or "",
        comment=doc.get("comment") or doc.get("text") or "",
        date=doc.get("createdAt") or _now_iso(),
        status=doc.get("status") or "approved",
        helpful=doc.get("helpful") or 0,
        reply=_review_reply(reply, doc) if reply else None,
    )


def map_message(doc: Dict[str, Any]) -> Message:
    inquiry = doc.get("inquiryType") or "general"
    return Message(
        id=_id(doc),
        name=doc.get("name") or "",
        email=doc.get("email") or "",
        phone=doc.get("phone"),
        company=doc.get("company"),
        inquiry_type=inquiry,
        inquiry_label=INQUIRY_LABELS.get(inquiry, INQUIRY_LABELS["general"]),
        subject=doc.get("subject") or "",
        message=doc.get("message") or "",
        status=doc.get("status") or "new",
        created_at=doc.get("createdAt"),
    )
