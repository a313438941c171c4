"""
Search predicates and summary figures for each manager screen.

Search is a case-insensitive substring match over the fields the screen
shows. A filter value of ``"all"`` turns that filter off.
"""
from typing import Dict, List, Union

from config import LOW_STOCK_THRESHOLD
from schemas import Order, Product, User, Review, Message

ALL = "all"


def _matches(term: str, *fields: str) -> bool:
    term = (term or "").lower()
    return any(term in (f or "").lower() for f in fields)


# Orders
def filter_orders(orders: List[Order], search: str = "", payment: str = ALL) -> List[Order]:
    return [
        o for o in orders
        if _matches(search, o.id, o.customer.name, o.customer.email)
        and (payment == ALL or o.payment_status == payment)
    ]


def order_stats(orders: List[Order]) -> Dict[str, float]:
    return {
        "total": len(orders),
        "processing": sum(1 for o in orders if o.status == "processing"),
        "delivered": sum(1 for o in orders if o.status == "delivered"),
        "revenue": sum(o.total or 0 for o in orders),
    }


# Products
def stock_label(product: Product) -> str:
    if product.stock == 0:
        return "Out of Stock"
    if product.stock < LOW_STOCK_THRESHOLD:
        return "Low Stock"
    return "Active" if product.status == "active" else "Inactive"


def filter_products(products: List[Product], search: str = "", category: str = ALL,
                    status: str = ALL) -> List[Product]:
    return [
        p for p in products
        if _matches(search, p.name, p.brand)
        and (category == ALL or p.category == category)
        and (status == ALL or p.status == status)
    ]


# Users
def filter_users(users: List[User], search: str = "", role: str = ALL, status: str = ALL) -> List[User]:
    result = []
    for u in users:
        # phone numbers are matched as typed, without case folding
        found = _matches(search, u.name, u.email) or (search or "") in u.phone
        if found and (role == ALL or u.role == role) and (status == ALL or u.status == status):
            result.append(u)
    return result


# Reviews
def filter_reviews(reviews: List[Review], search: str = "", rating: Union[int, str] = ALL,
                   status: str = ALL) -> List[Review]:
    return [
        r for r in reviews
        if _matches(search, r.product_name, r.user_name, r.comment)
        and (rating == ALL or r.rating == int(rating))
        and (status == ALL or r.status == status)
    ]


def review_stats(reviews: List[Review]) -> Dict[str, float]:
    avg = round(sum(r.rating for r in reviews) / len(reviews), 1) if reviews else 0
    return {
        "total": len(reviews),
        "approved": sum(1 for r in reviews if r.status == "approved"),
        "pending": sum(1 for r in reviews if r.status == "pending"),
        "avg_rating": avg,
    }


# Messages
def filter_messages(messages: List[Message], search: str = "", status: str = ALL) -> List[Message]:
    return [
        m for m in messages
        if _matches(search, m.name, m.email, m.subject)
        and (status == ALL or m.status == status)
    ]


def message_stats(messages: List[Message]) -> Dict[str, int]:
    return {
        "total": len(messages),
        "unread": sum(1 for m in messages if m.status == "new"),
    }
