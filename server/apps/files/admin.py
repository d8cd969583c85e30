"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import File, UserUsage


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes (may be negative for drifted counters).

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    magnitude = abs(size_bytes)
    if magnitude < 1024:
        return f'{size_bytes} B'
    if magnitude < 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / 1024:.1f} KB'
    if magnitude < 1024 * 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / (1024 * 1024):.1f} MB'
    return f'{size_bytes / (1024 * 1024 * 1024):.1f} GB'


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model."""

    list_display = [
        'filename',
        'user',
        'size_display',
        'mime_type',
        'created_at',
    ]

    list_filter = [
        'mime_type',
        'created_at',
    ]

    search_fields = [
        'filename',
        'storage_key',
        'user__email',
    ]

    # Records are written by upload handlers only
    readonly_fields = [
        'user',
        'filename',
        'mime_type',
        'size',
        'storage_key',
        'created_at',
    ]

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user')


@admin.register(UserUsage)
class UserUsageAdmin(admin.ModelAdmin[UserUsage]):
    """Admin interface for UserUsage model."""

    list_display = [
        'user',
        'storage_display',
        'bandwidth_display',
        'last_updated',
    ]

    search_fields = [
        'user__username',
        'user__email',
    ]

    readonly_fields = [
        'user',
        'storage_used_bytes',
        'bandwidth_used_bytes',
        'last_updated',
    ]

    def storage_display(self, obj: UserUsage) -> str:
        """Display storage usage in human-readable format."""
        return _format_bytes(obj.storage_used_bytes)
    storage_display.short_description = 'Storage'  # type: ignore[attr-defined]

    def bandwidth_display(self, obj: UserUsage) -> str:
        """Display bandwidth usage in human-readable format."""
        return _format_bytes(obj.bandwidth_used_bytes)
    bandwidth_display.short_description = 'Bandwidth'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[UserUsage]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user')
