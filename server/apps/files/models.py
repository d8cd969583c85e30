"""Database models for files app."""

from typing import Final, final, override

from django.conf import settings
from django.db import models
from django.utils import timezone

# Constants for field max lengths
_FILENAME_MAX_LENGTH: Final = 1024
_MIME_TYPE_MAX_LENGTH: Final = 255
_STORAGE_KEY_MAX_LENGTH: Final = 1024


@final
class File(models.Model):
    """Metadata for a file whose bytes live in S3-compatible storage.

    The storage key is the only link to the stored object. Records are
    created in bulk when an upload completes and deleted one at a time
    by their owner; they are never edited.
    """

    # Owner relationship
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    filename = models.CharField(
        max_length=_FILENAME_MAX_LENGTH,
        help_text='Original filename as uploaded',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        help_text='MIME type reported by the uploader',
    )

    size = models.BigIntegerField(
        help_text='File size in bytes',
    )

    storage_key = models.CharField(
        max_length=_STORAGE_KEY_MAX_LENGTH,
        unique=True,
        help_text='Object key in blob storage',
    )

    # Set explicitly on bulk insert to keep upload order
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        """Model metadata."""

        db_table = 'files'
        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['-created_at']

        indexes = [
            # Optimize listing queries (newest first)
            models.Index(
                fields=['user', '-created_at'],
                name='files_user_recent_idx',
            ),
            # Optimize owner-scoped key lookups
            models.Index(
                fields=['user', 'storage_key'],
                name='files_user_key_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user_id}:{self.filename}'


@final
class UserUsage(models.Model):
    """Running storage and bandwidth totals for a user.

    Counters are only changed by atomic increments. They are not
    constrained to be non-negative: callers subtract storage on delete.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='usage',
    )

    storage_used_bytes = models.BigIntegerField(
        default=0,
        help_text='Bytes currently stored',
    )

    bandwidth_used_bytes = models.BigIntegerField(
        default=0,
        help_text='Bytes served to date',
    )

    last_updated = models.DateTimeField(default=timezone.now)

    class Meta:
        """Model metadata."""

        db_table = 'user_usage'
        verbose_name = 'User Usage'  # type: ignore[mutable-override]
        verbose_name_plural = 'User Usage'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return (
            f'{self.user_id}: storage={self.storage_used_bytes}, '
            f'bandwidth={self.bandwidth_used_bytes}'
        )
