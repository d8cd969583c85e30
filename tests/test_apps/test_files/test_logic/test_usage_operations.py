"""Tests for usage counter business logic."""

from datetime import timedelta

import pytest
from django.utils import timezone

from server.apps.files.logic.usage_operations import (
    UsageSummary,
    create_user_usage,
    find_user_usage,
    get_user_usage,
    recalculate_storage_usage,
    track_bandwidth_usage,
    track_storage_change,
)
from server.apps.files.models import UserUsage


@pytest.fixture
def usage(user):
    """Usage row for the test user with known values.

    Returns:
        UserUsage with 1000 bytes stored and 300 bytes served.
    """
    last_updated = timezone.now() - timedelta(days=1)
    UserUsage.objects.filter(user=user).update(
        storage_used_bytes=1000,
        bandwidth_used_bytes=300,
        last_updated=last_updated,
    )
    return UserUsage.objects.get(user=user)


@pytest.fixture
def user_without_usage(user):
    """Test user whose usage row has been removed.

    Returns:
        User instance without a UserUsage row.
    """
    UserUsage.objects.filter(user=user).delete()
    return user


@pytest.mark.django_db
def test_create_user_usage_creates_new(user_without_usage):
    """Test create_user_usage creates zeroed counters."""
    usage = create_user_usage(user_without_usage.id)

    assert usage.user_id == user_without_usage.id
    assert usage.storage_used_bytes == 0
    assert usage.bandwidth_used_bytes == 0


@pytest.mark.django_db
def test_create_user_usage_returns_existing(usage):
    """Test create_user_usage returns the existing row."""
    result = create_user_usage(usage.user_id)

    assert result.pk == usage.pk
    assert result.storage_used_bytes == 1000


@pytest.mark.django_db
def test_track_storage_change_increments(usage):
    """Test storage usage grows by the delta and is stamped."""
    previous_update = usage.last_updated

    track_storage_change(usage.user_id, 500)

    usage.refresh_from_db()
    assert usage.storage_used_bytes == 1500
    assert usage.bandwidth_used_bytes == 300
    assert usage.last_updated > previous_update


@pytest.mark.django_db
def test_track_storage_change_negative_delta(usage):
    """Test a negative delta subtracts storage."""
    track_storage_change(usage.user_id, -400)

    usage.refresh_from_db()
    assert usage.storage_used_bytes == 600


@pytest.mark.django_db
def test_track_storage_change_can_go_negative(usage):
    """Test increments are unconditional, even below zero."""
    track_storage_change(usage.user_id, -1500)

    usage.refresh_from_db()
    assert usage.storage_used_bytes == -500


@pytest.mark.django_db
def test_track_storage_change_twice_equals_double(user, other_user):
    """Test two increments of d equal one increment of 2d."""
    track_storage_change(user.id, 250)
    track_storage_change(user.id, 250)
    track_storage_change(other_user.id, 500)

    assert get_user_usage(user.id) == get_user_usage(other_user.id)


@pytest.mark.django_db
def test_track_storage_change_without_usage_row(user_without_usage):
    """Test increments do not create missing rows."""
    track_storage_change(user_without_usage.id, 100)

    assert not UserUsage.objects.filter(user=user_without_usage).exists()


@pytest.mark.django_db
def test_track_bandwidth_usage_increments(usage):
    """Test bandwidth grows without touching last_updated."""
    previous_update = usage.last_updated

    track_bandwidth_usage(usage.user_id, 700)

    usage.refresh_from_db()
    assert usage.bandwidth_used_bytes == 1000
    assert usage.storage_used_bytes == 1000
    assert usage.last_updated == previous_update


@pytest.mark.django_db
def test_track_bandwidth_usage_only_own_row(usage, other_user):
    """Test increments are scoped to the given user."""
    track_bandwidth_usage(other_user.id, 50)

    usage.refresh_from_db()
    assert usage.bandwidth_used_bytes == 300
    assert get_user_usage(other_user.id).bandwidth_used_bytes == 50


@pytest.mark.django_db
def test_get_user_usage(usage):
    """Test reading returns the stored values unchanged."""
    result = get_user_usage(usage.user_id)

    assert result == UsageSummary(
        storage_used_bytes=1000,
        bandwidth_used_bytes=300,
    )
    assert not result.is_missing
    usage.refresh_from_db()
    assert usage.storage_used_bytes == 1000


@pytest.mark.django_db
def test_get_user_usage_missing_row(user_without_usage):
    """Test a user without a usage row gets the -1 sentinel."""
    result = get_user_usage(user_without_usage.id)

    assert result == UsageSummary(
        storage_used_bytes=-1,
        bandwidth_used_bytes=-1,
    )
    assert result is UsageSummary.MISSING
    assert result.is_missing


@pytest.mark.django_db
def test_find_user_usage(usage):
    """Test the optional form returns None for missing rows."""
    assert find_user_usage('nobody') is None
    assert find_user_usage(usage.user_id) == UsageSummary(1000, 300)


@pytest.mark.django_db
def test_recalculate_storage_usage(usage, make_file, user):
    """Test storage usage is reset to the sum of file sizes."""
    make_file(user, 'u1/a.txt', size=100)
    make_file(user, 'u1/b.txt', size=250)

    result = recalculate_storage_usage(user.id)

    assert result == 350
    usage.refresh_from_db()
    assert usage.storage_used_bytes == 350
    assert usage.bandwidth_used_bytes == 300


@pytest.mark.django_db
def test_recalculate_storage_usage_no_files(usage):
    """Test users without files are reset to zero."""
    assert recalculate_storage_usage(usage.user_id) == 0

    usage.refresh_from_db()
    assert usage.storage_used_bytes == 0


@pytest.mark.django_db
def test_recalculate_storage_usage_creates_row(
    user_without_usage,
    make_file,
):
    """Test recalculation creates a missing usage row."""
    make_file(user_without_usage, 'u1/a.txt', size=42)

    assert recalculate_storage_usage(user_without_usage.id) == 42
    assert get_user_usage(user_without_usage.id).storage_used_bytes == 42


@pytest.mark.django_db
def test_recalculate_storage_usage_keeps_concurrent_upload(
    usage,
    make_file,
    user,
    monkeypatch,
):
    """Test an upload landing mid-recalculation is counted once."""
    from server.apps.files.logic import usage_operations  # noqa: WPS433

    make_file(user, 'u1/a.txt', size=100)
    original_create = usage_operations.create_user_usage

    def create_then_upload(user_id, **kwargs):
        found = original_create(user_id, **kwargs)
        make_file(user, 'u1/b.txt', size=50)
        track_storage_change(user_id, 50)
        return found

    monkeypatch.setattr(
        usage_operations,
        'create_user_usage',
        create_then_upload,
    )

    assert recalculate_storage_usage(user.id) == 150
    usage.refresh_from_db()
    assert usage.storage_used_bytes == 150
