"""Tests for the user store."""

import pytest
from werkzeug.security import generate_password_hash

from secure_access.users import UserExistsError, UserStore


def get_store(users=None, db_path=":memory:") -> UserStore:
    store = UserStore(db_path, users)
    store.init_db()
    return store


def test_verify_configured_user():
    store = get_store({"alice": generate_password_hash("s3cret")})
    assert store.verify("alice", "s3cret") is True
    assert store.verify("alice", "wrong") is False
    assert store.verify("bob", "s3cret") is False


def test_add_user():
    store = get_store()
    store.add_user("  bob ", "hunter2")
    assert store.exists("bob")
    assert store.verify("bob", "hunter2")
    assert len(store) == 1


def test_add_configured_username_rejected():
    store = get_store({"alice": generate_password_hash("s3cret")})
    with pytest.raises(UserExistsError):
        store.add_user("alice", "other")
    assert store.verify("alice", "s3cret")


def test_add_duplicate_registered_user():
    store = get_store()
    store.add_user("bob", "hunter2")
    with pytest.raises(UserExistsError):
        store.add_user("bob", "other")
    assert store.verify("bob", "hunter2")
    # The store is still usable after the failed insert
    store.add_user("carol", "pw")
    assert len(store) == 2


def test_add_user_requires_fields():
    store = get_store()
    with pytest.raises(ValueError):
        store.add_user("", "pw")
    with pytest.raises(ValueError):
        store.add_user("carol", "")


def test_registered_users_shared_between_stores(tmp_path):
    db_path = str(tmp_path / "users.db")
    first = get_store(db_path=db_path)
    second = get_store(db_path=db_path)

    first.add_user("bob", "hunter2")

    assert second.exists("bob")
    assert second.verify("bob", "hunter2")
    with pytest.raises(UserExistsError):
        second.add_user("bob", "other")


def test_registered_users_survive_reopen(tmp_path):
    db_path = str(tmp_path / "data" / "users.db")
    with get_store(db_path=db_path) as store:
        store.add_user("bob", "hunter2")

    with UserStore(db_path) as reopened:
        assert reopened.verify("bob", "hunter2")
