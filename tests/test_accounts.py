# tests/test_accounts.py

from __future__ import annotations

import sqlite3

import pytest


def test_register_returns_new_user(accounts) -> None:
    user = accounts.register("testuser", "testpass")
    assert user is not None
    assert user.id > 0
    assert user.username == "testuser"


@pytest.mark.parametrize(
    ("username", "password"),
    [("", "testpass"), ("testuser", ""), ("   ", "testpass"), ("testuser", "  "), ("", "")],
)
def test_register_rejects_empty_fields(accounts, username, password) -> None:
    assert accounts.register(username, password) is None
    assert accounts.list_users() == []


def test_register_duplicate_username_fails(accounts) -> None:
    first = accounts.register("testuser", "testpass")
    assert first is not None
    assert accounts.register("testuser", "otherpass") is None
    assert [u.username for u in accounts.list_users()] == ["testuser"]


def test_login_with_registered_credentials(accounts) -> None:
    registered = accounts.register("testuser", "testpass")
    user = accounts.login("testuser", "testpass")
    assert user is not None
    assert user.id == registered.id
    assert user.username == "testuser"


def test_login_wrong_password_or_unknown_user(accounts) -> None:
    accounts.register("testuser", "testpass")
    assert accounts.login("testuser", "wrongpass") is None
    assert accounts.login("userDNE", "testpass") is None


def test_login_is_case_sensitive(accounts) -> None:
    accounts.register("testuser", "testpass")
    assert accounts.login("TestUser", "testpass") is None
    assert accounts.login("testuser", "TESTPASS") is None


def test_password_is_not_stored_verbatim(db, accounts) -> None:
    accounts.register("testuser", "testpass")
    with db.connection() as conn:
        stored = conn.execute("SELECT password FROM users WHERE username = ?", ("testuser",)).fetchone()[0]
    assert stored != "testpass"


def test_ensure_schema_is_idempotent(db, accounts) -> None:
    accounts.register("testuser", "testpass")
    accounts.ensure_schema()
    assert [u.username for u in accounts.list_users()] == ["testuser"]
    with db.connection() as conn:
        row = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name='users'").fetchone()
    assert row is not None


def test_username_lookups(accounts) -> None:
    alice = accounts.register("alice", "pw")
    bob = accounts.register("bob", "pw")
    assert accounts.get_username(alice.id) == "alice"
    assert accounts.get_username(9999) is None
    assert accounts.usernames_by_id([bob.id, alice.id, bob.id, 9999]) == {alice.id: "alice", bob.id: "bob"}
    assert accounts.usernames_by_id([]) == {}
    assert [u.username for u in accounts.list_users()] == ["alice", "bob"]


def test_store_failure_is_reported_as_none(db, accounts, monkeypatch) -> None:
    def broken():
        raise sqlite3.OperationalError("disk I/O error")

    monkeypatch.setattr(db, "connection", broken)
    assert accounts.register("testuser", "testpass") is None
    assert accounts.login("testuser", "testpass") is None
    assert accounts.list_users() == []


def test_login_with_non_hash_stored_password_fails(db, accounts) -> None:
    # a row written by an older build that kept the password as plain text
    with db.connection() as conn:
        conn.execute("INSERT INTO users (username, password) VALUES (?, ?)", ("old", "pa$$word"))
    assert accounts.login("old", "pa$$word") is None
    assert accounts.login("old", "other") is None


def test_ensure_schema_swallows_store_failure(db, accounts, monkeypatch) -> None:
    def broken():
        raise sqlite3.OperationalError("unable to open database file")

    monkeypatch.setattr(db, "connection", broken)
    assert accounts.ensure_schema() is None
    assert accounts.get_username(1) is None


def test_usernames_by_id_spans_several_queries(accounts, monkeypatch) -> None:
    monkeypatch.setattr("taskboard.accounts._ID_CHUNK", 2)
    users = [accounts.register(f"user{i}", "pw") for i in range(5)]
    names = accounts.usernames_by_id([u.id for u in users] + [9999])
    assert names == {u.id: u.username for u in users}
