"""
Order status timeline

Fulfillment moves forward through ``ORDER_STEPS``. ``cancelled`` sits outside
the sequence as a terminal state and gets its own rendering. No transition is
guarded or automatic; the admin picks the status and the store records it.
"""
from typing import Any, Dict, List, Optional

from schemas import ORDER_STATUSES, Tracking

CANCELLED = "cancelled"

ORDER_STEPS: List[Dict[str, str]] = [
    {"key": "processing", "label": "Order Placed", "description": "Your order has been placed"},
    {"key": "confirmed", "label": "Confirmed", "description": "Order confirmed by seller"},
    {"key": "shipped", "label": "Shipped", "description": "Package has been shipped"},
    {"key": "out_for_delivery", "label": "Out for Delivery", "description": "Package is out for delivery"},
    {"key": "delivered", "label": "Delivered", "description": "Package delivered successfully"},
]

STEP_KEYS = [step["key"] for step in ORDER_STEPS]


def format_status(status: str) -> str:
    return " ".join(word.capitalize() for word in status.replace("_", " ").split())


def step_index(status: Optional[str]) -> int:
    """Position of ``status`` in the fulfillment sequence, -1 when it is not a step."""
    current = (status or "").lower()
    return STEP_KEYS.index(current) if current in STEP_KEYS else -1


def is_cancelled(status: Optional[str]) -> bool:
    return (status or "").lower() == CANCELLED


def is_valid_status(status: str) -> bool:
    return status in ORDER_STATUSES


def progress(status: Optional[str]) -> Dict[str, float]:
    index = step_index(status)
    if index < 0:
        return {"horizontal": 0.0, "vertical": 0.0}
    return {
        "horizontal": index * 100 / (len(ORDER_STEPS) - 1),
        "vertical": (index + 1) * 100 / len(ORDER_STEPS),
    }


def tracking_block(tracking: Optional[Tracking], compact: bool = False) -> Optional[Dict[str, Any]]:
    if compact or tracking is None:
        return None
    if not (tracking.current_location or tracking.carrier or tracking.estimated_delivery):
        return None
    return {
        "carrier": tracking.carrier,
        "current_location": tracking.current_location,
        "estimated_delivery": tracking.estimated_delivery,
    }


def build_timeline(status: Optional[str], tracking: Optional[Tracking] = None,
                   order_date: Optional[str] = None, compact: bool = False) -> Dict[str, Any]:
    if is_cancelled(status):
        return {
            "status": CANCELLED,
            "cancelled": True,
            "compact": compact,
            "title": "Order Cancelled",
            "description": "This order has been cancelled",
            "order_date": order_date,
            "steps": [],
            "progress": {"horizontal": 0.0, "vertical": 0.0},
            "tracking": None,
        }

    index = step_index(status)
    steps = []
    for i, step in enumerate(ORDER_STEPS):
        steps.append({
            **step,
            "completed": i <= index,
            "current": i == index,
        })
    return {
        "status": (status or "").lower(),
        "cancelled": False,
        "compact": compact,
        "order_date": order_date,
        "steps": steps,
        "progress": progress(status),
        "tracking": tracking_block(tracking, compact),
    }
