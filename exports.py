import csv
import io
from datetime import date, datetime
from typing import List, Optional

from schemas import User

USER_EXPORT_HEADER = ["Name", "Email", "Phone", "Role", "Status", "Registered", "Orders", "Total Spent"]


def format_date(value: Optional[str]) -> str:
    """Render an ISO timestamp as ``5 Jan 2025``; ``N/A`` when missing or unparseable."""
    if not value:
        return "N/A"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return "N/A"
    return f"{parsed.day} {parsed.strftime('%b %Y')}"


def users_csv(users: List[User]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(USER_EXPORT_HEADER)
    for u in users:
        writer.writerow([
            u.name, u.email, u.phone, u.role, u.status,
            format_date(u.registered_at), u.total_orders, u.total_spent,
        ])
    return buf.getvalue()


def users_export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"users_export_{today.isoformat()}.csv"
