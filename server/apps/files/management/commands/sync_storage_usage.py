"""Management command to recompute storage usage from file records."""

import logging
from typing import Any, Final

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db.models import Sum  # noqa: WPS347

from server.apps.files.logic.usage_operations import (
    recalculate_storage_usage,
)
from server.apps.files.models import File, UserUsage

# Dry-run outcomes per user
_IN_SYNC: Final = 'in_sync'
_DRIFTED: Final = 'drifted'
_MISSING: Final = 'missing'

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Reset storage counters to the sum of each user's file sizes."""

    help = 'Recompute storage usage counters from file records'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--user',
            dest='user_ids',
            action='append',
            default=[],
            help='Only sync this user id (repeatable)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show drifted counters without changing them',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the sync command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        user_ids = options['user_ids'] or list(
            get_user_model().objects.order_by('pk').values_list(
                'pk',
                flat=True,
            ),
        )

        drifted = 0
        missing = 0
        failed = 0

        for user_id in user_ids:
            if dry_run:
                status = self._report_drift(user_id)
                if status == _DRIFTED:
                    drifted += 1
                elif status == _MISSING:
                    missing += 1
                continue

            try:
                total = recalculate_storage_usage(user_id)
            except Exception as exc:
                self.stderr.write(f'Failed to sync {user_id}: {exc}')
                logger.exception('Failed to sync storage usage: %s', user_id)
                failed += 1
                continue

            self.stdout.write(f'{user_id}: {total} bytes')

        if dry_run:
            summary = (
                f'Dry run: {drifted} of {len(user_ids)} counters drifted, ' +
                f'{missing} missing'
            )
            self.stdout.write(self.style.SUCCESS(summary))
            return

        summary = f'Synced {len(user_ids) - failed} users'
        if failed:
            summary = f'{summary}, {failed} failed'
        self.stdout.write(self.style.SUCCESS(summary))

    def _report_drift(self, user_id: str) -> str:
        """Print the counter and actual total for a drifted user.

        Args:
            user_id: User to check.

        Returns:
            ``_MISSING`` if the user has no usage row, ``_DRIFTED`` if
            the counter differs from the file total, ``_IN_SYNC``
            otherwise.
        """
        actual = File.objects.filter(user_id=user_id).aggregate(
            total=Sum('size'),
        )['total'] or 0
        stored = UserUsage.objects.filter(user_id=user_id).values_list(
            'storage_used_bytes',
            flat=True,
        ).first()

        if stored is None:
            self.stdout.write(
                f'Missing usage row for {user_id}: {actual} bytes in files',
            )
            return _MISSING

        if stored == actual:
            return _IN_SYNC

        self.stdout.write(
            f'Would sync {user_id}: {stored} -> {actual} bytes',
        )
        return _DRIFTED
