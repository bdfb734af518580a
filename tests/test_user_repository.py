"""User repository tests against in-memory SQLite."""

import pytest

from users_api.core.exceptions import ConflictError


def _user(email="a@b.com", **overrides):
    data = {
        "email": email,
        "password_hash": "hash",
        "subscription": "starter",
        "verify": False,
        "verification_token": f"token-{email}",
    }
    data.update(overrides)
    return data


def test_create_assigns_id_and_defaults(repo):
    user = repo.create({"email": "a@b.com", "password_hash": "hash"})

    assert user.id is not None
    assert user.subscription == "starter"
    assert user.verify is False
    assert user.token is None


def test_lookup_by_email_and_id(repo):
    created = repo.create(_user())

    assert repo.get_by_email("a@b.com").id == created.id
    assert repo.get_by_id(created.id).email == "a@b.com"
    assert repo.get_by_email("missing@b.com") is None
    assert repo.get_by_id(created.id + 100) is None


def test_duplicate_email_raises_conflict(repo):
    repo.create(_user())

    with pytest.raises(ConflictError):
        repo.create(_user(verification_token="other"))

    # Session is still usable after the rollback
    assert repo.get_by_email("a@b.com") is not None


def test_verification_token_lookup_respects_verify_filter(repo):
    repo.create(_user(verification_token="t1"))
    repo.create(_user("c@d.com", verify=True, verification_token="t2"))

    assert repo.get_by_verification_token("t1", verified=False) is not None
    assert repo.get_by_verification_token("t2", verified=False) is None
    assert repo.get_by_verification_token("t2").email == "c@d.com"
    assert repo.get_by_verification_token("") is None


def test_update_and_delete_by_email(repo):
    user = repo.create(_user())

    updated = repo.update(user, {"subscription": "pro", "unknown_field": 1})
    assert updated.subscription == "pro"

    assert repo.delete_by_email("a@b.com").id == user.id
    assert repo.get_by_email("a@b.com") is None
    assert repo.delete_by_email("a@b.com") is None
