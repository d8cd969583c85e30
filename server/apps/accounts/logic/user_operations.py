"""Read-only user lookups."""

import logging

from django.db import DEFAULT_DB_ALIAS

from server.apps.accounts.models import User

logger = logging.getLogger(__name__)


def get_user_by_email(
    email: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> User | None:
    """Find a user by exact email address.

    Args:
        email: Email address to look up.
        using: Database alias to query.

    Returns:
        Matching User, or None if no user has this email.

    Raises:
        Exception: If the query fails (logged before re-raising).
    """
    try:
        return User.objects.using(using).filter(email=email).first()
    except Exception:
        logger.exception('Error occurred at get_user_by_email: %s', email)
        raise


def get_user_by_id(
    user_id: str,
    *,
    using: str = DEFAULT_DB_ALIAS,
) -> User | None:
    """Find a user by identifier.

    Args:
        user_id: User primary key.
        using: Database alias to query.

    Returns:
        Matching User, or None if no user has this id.

    Raises:
        Exception: If the query fails (logged before re-raising).
    """
    try:
        return User.objects.using(using).filter(pk=user_id).first()
    except Exception:
        logger.exception('Error occurred at get_user_by_id: %s', user_id)
        raise
