from datetime import date

from exports import format_date, users_csv, users_export_filename
from mappers import map_user


def test_format_date():
    assert format_date("2026-01-05T10:00:00Z") == "5 Jan 2026"
    assert format_date(None) == "N/A"
    assert format_date("not a date") == "N/A"


def test_users_csv_quotes_text_only():
    users = [map_user({
        "_id": "u1", "fullname": "Rao, Asha", "email": "asha@x.com", "phone": "98765",
        "createdAt": "2026-03-14T09:30:00Z", "orderCount": 3, "totalSpent": 4500.5,
    })]
    lines = users_csv(users).splitlines()
    assert lines[0] == '"Name","Email","Phone","Role","Status","Registered","Orders","Total Spent"'
    assert lines[1] == '"Rao, Asha","asha@x.com","98765","customer","active","14 Mar 2026",3,4500.5'


def test_export_filename():
    assert users_export_filename(date(2026, 10, 19)) == "users_export_2026-10-19.csv"
