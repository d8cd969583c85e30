"""Shared fixtures for all tests."""

import pytest
from django.contrib.auth import get_user_model

from server.apps.files.logic.file_operations import NewFileRecord
from server.apps.files.models import File

User = get_user_model()


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance with id 'u1'.
    """
    return User.objects.create_user(
        id='u1',
        username='testuser',
        password='testpass123',
        email='test@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        id='u2',
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def make_file(db):
    """Factory for File records.

    Returns:
        Callable creating a File for a user with sensible defaults.
    """
    def factory(user, key, **fields):
        fields.setdefault('filename', f'{key}.bin')
        fields.setdefault('mime_type', 'application/octet-stream')
        fields.setdefault('size', 100)
        return File.objects.create(user=user, storage_key=key, **fields)

    return factory


@pytest.fixture
def upload_batch():
    """Sample upload batch with one file of each category.

    Returns:
        List of NewFileRecord in upload order.
    """
    return [
        NewFileRecord(
            name='holiday.jpg',
            size=2048,
            key='u1/holiday.jpg',
            content_type='image/jpeg',
        ),
        NewFileRecord(
            name='clip.mp4',
            size=4096,
            key='u1/clip.mp4',
            content_type='video/mp4',
        ),
        NewFileRecord(
            name='Quarterly report.pdf',
            size=512,
            key='u1/report.pdf',
            content_type='application/pdf',
        ),
        NewFileRecord(
            name='notes.txt',
            size=64,
            key='u1/notes.txt',
            content_type='text/plain',
        ),
    ]
