"""Signal handlers for files app."""

import logging
from typing import Any

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from server.apps.files.logic.usage_operations import create_user_usage

# User type for Django's swappable user model
_User = Any

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_usage_for_new_user(
    sender: type,
    instance: _User,
    created: bool,  # noqa: FBT001
    **kwargs: object,
) -> None:
    """Create usage counters when a user signs up.

    Usage increments never create rows, so every user needs one
    from the start.

    Args:
        sender: The user model class.
        instance: The saved user.
        created: Whether the user was just created.
        **kwargs: Additional signal arguments.
    """
    if not created or kwargs.get('raw'):
        return

    using = str(kwargs['using'])
    logger.debug('Creating usage counters for new user %s', instance.pk)
    create_user_usage(instance.pk, using=using)
