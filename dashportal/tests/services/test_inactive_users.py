from __future__ import annotations

from dashportal.services.inactive_users import InactiveUserCleanup

INACTIVE = {
    "success": True,
    "data": [
        {"id": "u1", "name": "Old One", "email": "one@x.com"},
        {"id": "u2", "name": "Old Two", "email": "two@x.com"},
        {"id": "u3", "name": "Old Three", "email": "three@x.com"},
    ],
}


def test_list_inactive_users(backend, client):
    backend.on("GET", "/users/inativos", body=INACTIVE)
    cleanup = InactiveUserCleanup(client)
    assert [u.id for u in cleanup.list_inactive_users()] == ["u1", "u2", "u3"]
    assert cleanup.error is None


def test_list_failure_sets_error(backend, client):
    backend.on("GET", "/users/inativos", status=500, body={"message": "boom"})
    cleanup = InactiveUserCleanup(client)
    assert cleanup.list_inactive_users() == []
    assert "boom" in cleanup.error


def test_delete_all_is_sequential_and_reports_failures(backend, client):
    backend.on("GET", "/users/inativos", body=INACTIVE)
    backend.on("DELETE", "/users/u1", status=204)
    backend.on("DELETE", "/users/u2", status=500, body={"message": "locked"})
    backend.on("DELETE", "/users/u3", status=200, body={"success": True})
    cleanup = InactiveUserCleanup(client, actor="admin@x.com")
    cleanup.list_inactive_users()

    report = cleanup.delete_all_inactive(confirm=True)

    deletes = [r.url.path for r in backend.calls("DELETE")]
    assert deletes == ["/users/u1", "/users/u2", "/users/u3"]
    assert report.deleted == ["u1", "u3"]
    assert report.failed == ["u2"]
    assert not report.ok
    assert [u.id for u in cleanup.users] == ["u2"]


def test_delete_single_user(backend, client):
    backend.on("GET", "/users/inativos", body=INACTIVE)
    backend.on("DELETE", "/users/u2", status=204)
    cleanup = InactiveUserCleanup(client)
    cleanup.list_inactive_users()
    assert cleanup.delete_user("u2", confirm=True)
    assert [u.id for u in cleanup.users] == ["u1", "u3"]


def test_delete_with_nothing_listed(client):
    report = InactiveUserCleanup(client).delete_all_inactive(confirm=True)
    assert report.ok
    assert report.deleted == []


def test_malformed_inactive_row_sets_error(backend, client):
    backend.on("GET", "/users/inativos", body={"success": True, "data": [{"name": "no id"}]})
    cleanup = InactiveUserCleanup(client)
    assert cleanup.list_inactive_users() == []
    assert cleanup.error


def test_delete_single_user_requires_confirmation(backend, client):
    backend.on("GET", "/users/inativos", body=INACTIVE)
    cleanup = InactiveUserCleanup(client)
    cleanup.list_inactive_users()
    assert not cleanup.delete_user("u2")
    assert "Confirm" in cleanup.error
    assert backend.calls("DELETE") == []
    assert [u.id for u in cleanup.users] == ["u1", "u2", "u3"]


def test_delete_all_requires_confirmation(backend, client):
    backend.on("GET", "/users/inativos", body=INACTIVE)
    cleanup = InactiveUserCleanup(client)
    cleanup.list_inactive_users()
    report = cleanup.delete_all_inactive()
    assert backend.calls("DELETE") == []
    assert report.deleted == []
    assert report.failed == ["u1", "u2", "u3"]
    assert not report.ok
