"""
Tests for the admin audit history endpoint.
"""

import re
from datetime import datetime

from helpdesk.models.audit_log import AuditLog
from helpdesk.services.audit_service import AuditWriter


def as_user(user):
    return {"X-User-Id": user.id}


def seed(db, count, **fields):
    for i in range(count):
        db.add(AuditLog(
            action=fields.get("action", "ticket.create"),
            resource_type=fields.get("resource_type", "Ticket"),
            resource_id=str(i + 1),
            user_id=fields.get("user_id"),
            created_at=fields.get("created_at", datetime(2024, 3, 1, 12, 0, i)),
        ))
    db.commit()


class TestAccess:

    def test_anonymous_gets_404(self, client):
        assert client.get("/admin/audit").status_code == 404

    def test_regular_user_gets_404(self, client, alice):
        assert client.get("/admin/audit", headers=as_user(alice)).status_code == 404

    def test_admin_gets_page(self, client, admin):
        """Admins see the page, even when it is empty."""
        response = client.get("/admin/audit", headers=as_user(admin))
        assert response.status_code == 200
        assert response.json()["summary"] == "Showing 0 - 0 of 0"


class TestRows:

    def test_row_columns(self, client, db_session, admin, alice):
        """Rows carry number, date, time, user, label and changes."""
        seed(db_session, 1, user_id=alice.id, created_at=datetime(2024, 3, 1, 14, 5, 9))
        seed(db_session, 1, action="auth.logout", resource_type="User",
             created_at=datetime(2024, 3, 1, 9, 0, 0))

        data = client.get("/admin/audit", headers=as_user(admin)).json()

        assert data["rows"][0] == {
            "number": 1,
            "date": "2024-03-01",
            "time": "14:05:09",
            "user": "Alice",
            "action": "Created ticket #1",
            "changes": [],
        }
        assert data["rows"][1]["user"] == "Anonymous"
        assert data["rows"][1]["action"] == "Logged out of the system"

    def test_redacted_changes_are_summarized(self, client, db_session, admin):
        """Masked fields never show up as changes."""
        AuditWriter.transactional(db_session).record(
            action="user.update",
            resource_type="User",
            resource_id="u1",
            before={"password": "abc", "name": "Bob"},
            after={"password": "xyz", "name": "Carol"},
        )
        db_session.commit()

        row = client.get("/admin/audit", headers=as_user(admin)).json()["rows"][0]

        assert row["action"] == "user.update — User #u1"
        assert row["changes"] == ['Name: "Bob" changed to "Carol"']

    def test_end_to_end_create_is_labelled(self, client, db_session, admin, alice):
        """A ticket created through the API shows up labelled in the history."""
        response = client.post(
            "/tickets",
            json={"subject": "Printer down", "description": "Jammed", "priority": "High"},
            headers=as_user(alice),
        )
        ticket_id = response.json()["id"]

        data = client.get(
            "/admin/audit",
            params={"resourceType": "Ticket"},
            headers=as_user(admin),
        ).json()

        assert data["total"] == 1
        assert data["rows"][0]["action"] == f"Created ticket #{ticket_id}"
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", data["rows"][0]["date"])
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", data["rows"][0]["time"])


class TestPaging:

    def test_page_size_clamped_to_100(self, client, db_session, admin):
        seed(db_session, 3)
        data = client.get(
            "/admin/audit", params={"pageSize": "1000"}, headers=as_user(admin)
        ).json()
        assert data["page_size"] == 100

    def test_page_zero_is_page_one(self, client, db_session, admin):
        seed(db_session, 3)
        data = client.get(
            "/admin/audit", params={"page": "0"}, headers=as_user(admin)
        ).json()
        assert data["page"] == 1
        assert data["rows"][0]["number"] == 1

    def test_second_page_numbering_and_summary(self, client, db_session, admin):
        """Row numbers continue across pages."""
        seed(db_session, 5)
        data = client.get(
            "/admin/audit",
            params={"page": "2", "pageSize": "2"},
            headers=as_user(admin),
        ).json()

        assert [r["number"] for r in data["rows"]] == [3, 4]
        assert data["summary"] == "Showing 3 - 4 of 5"
        assert data["total"] == 5

    def test_links_keep_filters(self, client, db_session, admin):
        """Page links carry the active filters along."""
        seed(db_session, 5, action="ticket.close")
        data = client.get(
            "/admin/audit",
            params={"action": "close", "pageSize": "2", "page": "2"},
            headers=as_user(admin),
        ).json()

        nav = data["navigation"]
        assert nav["previous"] == "?action=close&pageSize=2&page=1"
        assert nav["next"] == "?action=close&pageSize=2&page=3"
        assert [p["number"] for p in nav["pages"]] == [1, 2, 3]
        assert [p["current"] for p in nav["pages"]] == [False, True, False]


class TestFilters:

    def test_single_day_range(self, client, db_session, admin):
        """A one-day range includes the last millisecond of the day."""
        seed(db_session, 1, created_at=datetime(2023, 12, 31, 23, 59, 59))
        seed(db_session, 1, created_at=datetime(2024, 1, 1, 0, 0, 0))
        seed(db_session, 1, created_at=datetime(2024, 1, 1, 23, 59, 59, 999000))
        seed(db_session, 1, created_at=datetime(2024, 1, 2, 0, 0, 0))

        data = client.get(
            "/admin/audit",
            params={"start": "2024-01-01", "end": "2024-01-01"},
            headers=as_user(admin),
        ).json()

        assert data["total"] == 2
        assert [r["time"] for r in data["rows"]] == ["23:59:59", "00:00:00"]

    def test_bad_date_is_ignored(self, client, db_session, admin):
        seed(db_session, 2)
        data = client.get(
            "/admin/audit", params={"start": "soon"}, headers=as_user(admin)
        ).json()
        assert data["total"] == 2

    def test_user_filter(self, client, db_session, admin, alice):
        seed(db_session, 2, user_id=alice.id)
        seed(db_session, 3)
        data = client.get(
            "/admin/audit", params={"userId": alice.id}, headers=as_user(admin)
        ).json()
        assert data["total"] == 2


class TestEntryDetail:

    def test_entry_exposes_redacted_snapshots(self, client, db_session, admin):
        """The detail view returns stored snapshots, already masked."""
        entry = AuditWriter.transactional(db_session).record(
            action="auth.register",
            resource_type="User",
            resource_id="u1",
            after={"name": "Bob", "password": "secret"},
            metadata={"ip": "10.0.0.1"},
        )
        db_session.commit()

        data = client.get(f"/admin/audit/{entry.id}", headers=as_user(admin)).json()

        assert data["after"] == {"name": "Bob", "password": "[REDACTED]"}
        assert data["metadata"] == {"ip": "10.0.0.1"}
        assert data["before"] is None

    def test_unknown_entry_returns_404(self, client, admin):
        assert client.get("/admin/audit/999", headers=as_user(admin)).status_code == 404

    def test_non_admin_gets_404(self, client, db_session, alice):
        seed(db_session, 1)
        assert client.get("/admin/audit/1", headers=as_user(alice)).status_code == 404
