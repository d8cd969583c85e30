"""Business logic for file metadata operations.

Every query is scoped to the owning user. The file bytes live in
blob storage and are handled by the caller; only keys and metadata
are stored here.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import final

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DEFAULT_DB_ALIAS, transaction
from django.utils import timezone

from server.apps.files.exceptions import FileNotFoundOrUnauthorizedError
from server.apps.files.logic.file_filters import build_file_filter
from server.apps.files.models import File

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True, slots=True)
class FileInfo:
    """Listing entry for a single file."""

    storage_key: str
    filename: str
    content_type: str
    size: int


@final
@dataclass(frozen=True, slots=True)
class FileInfoPage:
    """One page of a file listing."""

    file_info: list[FileInfo]
    total_pages: int
    current_page: int


@final
@dataclass(frozen=True, slots=True)
class NewFileRecord:
    """Metadata for an uploaded file, as reported by the uploader."""

    name: str
    size: int
    key: str
    content_type: str


def get_file_info(  # noqa: WPS211
    user_id: str,
    page: int = 1,
    page_size: int | None = None,
    selected_file_types: Iterable[str] = (),
    file_name: str | None = None,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> FileInfoPage:
    """List a page of the user's files, newest first.

    Args:
        user_id: Owner of the files.
        page: 1-based page number.
        page_size: Files per page. Defaults to FILES_DEFAULT_PAGE_SIZE.
        selected_file_types: Filter tags (``images``, ``videos``,
            ``pdf``, ``other``) combined with OR.
        file_name: Optional case-insensitive filename fragment.
        using: Database alias to query.

    Returns:
        FileInfoPage with the page entries and total page count.

    Raises:
        ValidationError: If page or page_size is below 1.
    """
    if page_size is None:
        page_size = settings.FILES_DEFAULT_PAGE_SIZE
    if page < 1:
        raise ValidationError(f'Page must be 1 or greater, got {page}')
    if page_size < 1:
        raise ValidationError(
            f'Page size must be 1 or greater, got {page_size}',
        )

    offset = (page - 1) * page_size
    files = File.objects.using(using).filter(
        build_file_filter(user_id, selected_file_types, file_name),
    )

    rows = files.order_by('-created_at').values(
        'storage_key',
        'filename',
        'mime_type',
        'size',
    )[offset:offset + page_size]
    total_count = files.count()

    file_info = [
        FileInfo(
            storage_key=row['storage_key'],
            filename=row['filename'],
            content_type=row['mime_type'],
            size=row['size'],
        )
        for row in rows
    ]

    return FileInfoPage(
        file_info=file_info,
        total_pages=math.ceil(total_count / page_size),
        current_page=page,
    )


def insert_file_records(
    user_id: str,
    files_data: Sequence[NewFileRecord],
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> int:
    """Create file records for a completed upload batch.

    Each record is stamped one millisecond after the previous one so
    that newest-first listings reflect upload order even when the
    whole batch lands within the same clock tick.

    Args:
        user_id: Owner of the files.
        files_data: Uploaded files in upload order.
        using: Database alias to write to.

    Returns:
        Number of records created.

    Raises:
        IntegrityError: If a storage key already exists (nothing is
            inserted).
    """
    now = timezone.now()
    records = [
        File(
            user_id=user_id,
            filename=file_data.name,
            mime_type=file_data.content_type,
            size=file_data.size,
            storage_key=file_data.key,
            created_at=now + timedelta(milliseconds=index),
        )
        for index, file_data in enumerate(files_data)
    ]

    with transaction.atomic(using=using):
        created = File.objects.using(using).bulk_create(records)

    logger.info(
        'Inserted %d file records for user %s',
        len(created),
        user_id,
    )
    return len(created)


def delete_file_record(
    user_id: str,
    storage_key: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> str:
    """Delete the user's file record with the given storage key.

    Args:
        user_id: Owner of the file.
        storage_key: Storage key of the file.
        using: Database alias to write to.

    Returns:
        The deleted storage key.

    Raises:
        FileNotFoundOrUnauthorizedError: If the user owns no file with
            this key.
    """
    try:
        deleted, _ = File.objects.using(using).filter(
            user_id=user_id,
            storage_key=storage_key,
        ).delete()

        if deleted == 0:
            raise FileNotFoundOrUnauthorizedError(user_id, storage_key)
    except Exception:
        logger.exception('Error deleting file record: %s', storage_key)
        raise

    logger.info('File record deleted: %s (user: %s)', storage_key, user_id)
    return storage_key


def check_user_file_access(
    user_id: str,
    storage_key: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> bool:
    """Check if the user owns a file with the given storage key.

    Args:
        user_id: User requesting access.
        storage_key: Storage key of the file.
        using: Database alias to query.

    Returns:
        True if the user owns the file, False otherwise.
    """
    return File.objects.using(using).filter(
        user_id=user_id,
        storage_key=storage_key,
    ).exists()
