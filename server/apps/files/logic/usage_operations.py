"""Business logic for per-user storage and bandwidth counters."""

import logging
from dataclasses import dataclass
from typing import ClassVar, Final, final

from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import (  # noqa: WPS347
    BigIntegerField,
    F,
    OuterRef,
    Subquery,
    Sum,
    Value,
)
from django.db.models.functions import Coalesce
from django.utils import timezone

from server.apps.files.models import File, UserUsage

# Field name constants to avoid string literal over-use
_STORAGE_FIELD: Final = 'storage_used_bytes'
_BANDWIDTH_FIELD: Final = 'bandwidth_used_bytes'

# Reported by get_user_usage when the user has no usage row
_MISSING_BYTES: Final = -1

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True, slots=True)
class UsageSummary:
    """Storage and bandwidth totals for a user."""

    MISSING: ClassVar['UsageSummary']

    storage_used_bytes: int
    bandwidth_used_bytes: int

    @property
    def is_missing(self) -> bool:
        """Whether this is the sentinel for a user without a usage row."""
        return self == UsageSummary.MISSING


UsageSummary.MISSING = UsageSummary(
    storage_used_bytes=_MISSING_BYTES,
    bandwidth_used_bytes=_MISSING_BYTES,
)


def create_user_usage(
    user_id: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> UserUsage:
    """Get or create the usage row for a user.

    Args:
        user_id: User to create the row for.
        using: Database alias to write to.

    Returns:
        UserUsage instance for the user.
    """
    usage, created = UserUsage.objects.using(using).get_or_create(
        user_id=user_id,
    )
    if created:
        logger.info('Created usage counters for user %s', user_id)
    return usage


def track_storage_change(
    user_id: str,
    bytes_change: int,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> None:
    """Atomically add a signed delta to the user's storage usage.

    Callers pass a positive delta on upload and a negative one on
    delete. Users without a usage row are left untouched.

    Args:
        user_id: User to update.
        bytes_change: Bytes to add (negative to subtract).
        using: Database alias to write to.
    """
    updated = UserUsage.objects.using(using).filter(user_id=user_id).update(
        storage_used_bytes=F(_STORAGE_FIELD) + bytes_change,
        last_updated=timezone.now(),
    )
    logger.debug(
        'Storage usage for user %s changed by %d bytes (%d rows)',
        user_id,
        bytes_change,
        updated,
    )


def track_bandwidth_usage(
    user_id: str,
    bytes_used: int,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> None:
    """Atomically add served bytes to the user's bandwidth usage.

    Unlike storage changes, this does not touch ``last_updated``.

    Args:
        user_id: User to update.
        bytes_used: Bytes served.
        using: Database alias to write to.
    """
    updated = UserUsage.objects.using(using).filter(user_id=user_id).update(
        bandwidth_used_bytes=F(_BANDWIDTH_FIELD) + bytes_used,
    )
    logger.debug(
        'Bandwidth usage for user %s increased by %d bytes (%d rows)',
        user_id,
        bytes_used,
        updated,
    )


def find_user_usage(
    user_id: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> UsageSummary | None:
    """Read the user's usage counters.

    Args:
        user_id: User to read.
        using: Database alias to query.

    Returns:
        UsageSummary, or None if the user has no usage row.
    """
    row = UserUsage.objects.using(using).filter(
        user_id=user_id,
    ).values(_STORAGE_FIELD, _BANDWIDTH_FIELD).first()

    if row is None:
        return None
    return UsageSummary(
        storage_used_bytes=row[_STORAGE_FIELD],
        bandwidth_used_bytes=row[_BANDWIDTH_FIELD],
    )


def get_user_usage(
    user_id: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> UsageSummary:
    """Read the user's usage counters, with a sentinel for missing rows.

    Args:
        user_id: User to read.
        using: Database alias to query.

    Returns:
        UsageSummary, or ``UsageSummary.MISSING`` (both values -1)
        if the user has no usage row.
    """
    usage = find_user_usage(user_id, using=using)
    if usage is None:
        return UsageSummary.MISSING
    return usage


def recalculate_storage_usage(
    user_id: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> int:
    """Recompute the user's storage usage from their file records.

    Fixes counters that drifted from missed or doubled increments.
    Creates the usage row if it does not exist.

    Args:
        user_id: User to recalculate.
        using: Database alias to use.

    Returns:
        New storage usage in bytes.
    """
    file_total = File.objects.using(using).filter(
        user_id=OuterRef('user_id'),
    ).order_by().values('user_id').annotate(
        total=Sum('size'),
    ).values('total')

    with transaction.atomic(using=using):
        usage = create_user_usage(user_id, using=using)
        old_usage = usage.storage_used_bytes

        # Sum and overwrite in one UPDATE so concurrent uploads are kept
        UserUsage.objects.using(using).filter(pk=usage.pk).update(
            storage_used_bytes=Coalesce(
                Subquery(file_total),
                Value(0),
                output_field=BigIntegerField(),
            ),
            last_updated=timezone.now(),
        )
        total = UserUsage.objects.using(using).filter(
            pk=usage.pk,
        ).values_list(_STORAGE_FIELD, flat=True).get()

    logger.info(
        'Recalculated storage usage for user %s: %d -> %d bytes',
        user_id,
        old_usage,
        total,
    )

    return total
