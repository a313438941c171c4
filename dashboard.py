from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from config import DASHBOARD_LOW_STOCK
from mappers import map_review
from notifications import parse_timestamp


def _month_start(now: datetime, months_back: int = 0) -> datetime:
    year, month = now.year, now.month - months_back
    while month < 1:
        month += 12
        year -= 1
    return datetime(year, month, 1, tzinfo=timezone.utc)


def _revenue(orders: List[Dict[str, Any]]) -> float:
    return sum(o.get("total") or 0 for o in orders)


def compute_stats(orders: List[Dict[str, Any]], users: List[Dict[str, Any]], products: List[Dict[str, Any]],
                  now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    this_month = _month_start(now)
    last_month = _month_start(now, 1)

    def created(doc):
        return parse_timestamp(doc.get("createdAt") or "")

    this_month_orders = [o for o in orders if created(o) and created(o) >= this_month]
    last_month_orders = [o for o in orders if created(o) and last_month <= created(o) < this_month]
    last_revenue = _revenue(last_month_orders)
    growth = 0.0
    if last_revenue > 0:
        growth = round((_revenue(this_month_orders) - last_revenue) / last_revenue * 100, 1)

    return {
        "totalOrders": len(orders),
        "totalUsers": len(users),
        "totalProducts": len(products),
        "totalRevenue": _revenue(orders),
        "pendingOrders": sum(1 for o in orders if o.get("status") in ("processing", "confirmed")),
        "lowStockItems": sum(1 for p in products if (p.get("stock") or 0) < DASHBOARD_LOW_STOCK),
        "newUsers": sum(1 for u in users if created(u) and created(u) >= this_month),
        "monthlyGrowth": growth,
    }


def recent_orders(orders: List[Dict[str, Any]], limit: int = 5) -> List[Dict[str, Any]]:
    result = []
    for o in orders[:limit]:
        user = o.get("user") or {}
        shipping = o.get("shippingAddress") or {}
        result.append({
            "id": o.get("orderNumber") or o.get("_id"),
            "customer": user.get("fullname") or shipping.get("fullname") or "Customer",
            "email": user.get("email") or "N/A",
            "amount": o.get("total") or 0,
            "status": o.get("status") or "processing",
            "date": o.get("createdAt"),
            "items": len(o.get("items") or []),
        })
    return result


def recent_reviews(reviews: List[Dict[str, Any]], limit: int = 5):
    return [map_review(r, i) for i, r in enumerate(reviews[:limit])]
