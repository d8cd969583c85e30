"""Database models for accounts app."""

import uuid
from typing import Final, final, override

from django.contrib.auth.models import AbstractUser
from django.db import models

# UUID4 text is 36 characters; external identity providers may use shorter ids
_USER_ID_MAX_LENGTH: Final = 36


def generate_user_id() -> str:
    """Generate a new user identifier.

    Returns:
        Random UUID4 as text.
    """
    return str(uuid.uuid4())


@final
class User(AbstractUser):
    """Application user.

    Identifiers are opaque strings so ids issued by an external
    identity provider can be stored as-is. Email is unique because
    users are looked up by it.
    """

    id = models.CharField(  # noqa: A003
        primary_key=True,
        max_length=_USER_ID_MAX_LENGTH,
        default=generate_user_id,
        editable=False,
    )

    email = models.EmailField(
        unique=True,
        help_text='Unique email address used for lookups',
    )

    class Meta:
        """Model metadata."""

        db_table = 'users'
        verbose_name = 'User'  # type: ignore[mutable-override]
        verbose_name_plural = 'Users'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.username} <{self.email}>'
