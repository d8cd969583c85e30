"""Settings for the production environment."""

from server.settings.components import config

DEBUG = False

ALLOWED_HOSTS = [
    config('DOMAIN_NAME'),
]

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
