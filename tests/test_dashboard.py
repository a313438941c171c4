from datetime import datetime, timezone

from dashboard import compute_stats, recent_orders, recent_reviews

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_stats():
    orders = [
        {"_id": "1", "status": "processing", "total": 3000, "createdAt": "2026-10-02T10:00:00Z"},
        {"_id": "2", "status": "confirmed", "total": 1000, "createdAt": "2026-09-30T23:30:00Z"},
        {"_id": "3", "status": "delivered", "total": 1000, "createdAt": "2026-09-10T10:00:00Z"},
        {"_id": "4", "status": "cancelled", "total": 500, "createdAt": "2026-08-10T10:00:00Z"},
    ]
    users = [{"_id": "u1", "createdAt": "2026-10-01T00:00:00Z"}, {"_id": "u2", "createdAt": "2026-09-01T00:00:00Z"}]
    products = [{"_id": "p1", "stock": 3}, {"_id": "p2", "stock": 40}, {"_id": "p3"}]

    stats = compute_stats(orders, users, products, now=NOW)
    assert stats["totalOrders"] == 4
    assert stats["totalUsers"] == 2
    assert stats["totalProducts"] == 3
    assert stats["totalRevenue"] == 5500
    assert stats["pendingOrders"] == 2
    assert stats["lowStockItems"] == 2
    assert stats["newUsers"] == 1
    # 3000 this month against 2000 last month
    assert stats["monthlyGrowth"] == 50.0


def test_growth_without_last_month_revenue():
    stats = compute_stats([{"total": 100, "createdAt": "2026-10-02T10:00:00Z"}], [], [], now=NOW)
    assert stats["monthlyGrowth"] == 0.0


def test_growth_across_year_boundary():
    january = datetime(2027, 1, 5, tzinfo=timezone.utc)
    orders = [{"total": 100, "createdAt": "2026-12-15T00:00:00Z"}, {"total": 50, "createdAt": "2027-01-02T00:00:00Z"}]
    assert compute_stats(orders, [], [], now=january)["monthlyGrowth"] == -50.0


def test_recent_activity():
    orders = [{"_id": str(i), "total": i, "items": [{}] * i} for i in range(7)]
    recent = recent_orders(orders)
    assert len(recent) == 5
    assert recent[2] == {"id": "2", "customer": "Customer", "email": "N/A", "amount": 2,
                         "status": "processing", "date": None, "items": 2}
    assert [r.id for r in recent_reviews([{"_id": "r1"}, {"_id": "r2"}])] == ["r1", "r2"]
