"""Exceptions for files app."""


class FileNotFoundOrUnauthorizedError(Exception):
    """Raised when a delete matches no file owned by the user."""

    def __init__(self, user_id: str, storage_key: str) -> None:
        """Initialize FileNotFoundOrUnauthorizedError.

        Args:
            user_id: User who requested the delete.
            storage_key: Storage key that matched nothing.
        """
        self.user_id = user_id
        self.storage_key = storage_key

        super().__init__(
            'File not found or user not authorized to delete this file '
            f'(key: {storage_key}, user: {user_id})',
        )
