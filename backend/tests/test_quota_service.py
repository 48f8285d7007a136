"""Tests for the free-tier quota."""

import pytest

from clipkeeper.exceptions import UserNotFoundError
from clipkeeper.services.quota_service import QuotaService


def add_links(repository, user_id, count):
    for i in range(count):
        repository.create_link(
            user_id=user_id,
            url=f"https://youtu.be/{user_id}-{i}",
            title=f"Clip {i}",
            platform="youtube",
            category="Music",
        )
    repository.commit()


def test_free_user_under_limit_allowed(make_user, repository):
    user = make_user()
    add_links(repository, user.id, 2)

    assert QuotaService(repository, limit=3).check_quota(user.id) is True


def test_free_user_at_limit_denied(make_user, repository):
    user = make_user()
    add_links(repository, user.id, 3)

    assert QuotaService(repository, limit=3).check_quota(user.id) is False


def test_premium_user_always_allowed(make_user, repository):
    user = make_user(is_premium=True)
    add_links(repository, user.id, 5)

    assert QuotaService(repository, limit=3).check_quota(user.id) is True


def test_default_limit_is_fifty(repository):
    assert QuotaService(repository).limit == 50


def test_unknown_user_raises(repository):
    with pytest.raises(UserNotFoundError):
        QuotaService(repository).check_quota(999)


def test_usage_for_free_user(make_user, repository):
    user = make_user()
    add_links(repository, user.id, 2)

    status = QuotaService(repository, limit=3).usage(user.id)

    assert status.is_premium is False
    assert status.link_count == 2
    assert status.limit == 3
    assert status.remaining == 1


def test_usage_for_premium_user(make_user, repository):
    user = make_user(is_premium=True)

    status = QuotaService(repository).usage(user.id)

    assert status.is_premium is True
    assert status.limit is None
    assert status.remaining is None
