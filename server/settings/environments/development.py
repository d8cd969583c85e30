"""Settings for local development and tests."""

from typing import Final

DEBUG = True

ALLOWED_HOSTS: Final = [
    'localhost',
    '127.0.0.1',
    '[::1]',
]
