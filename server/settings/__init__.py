"""Main settings file.

Do not edit this file directly. Add or change components under
``server/settings/components`` and per-environment overrides under
``server/settings/environments``.

``DJANGO_ENV`` selects the environment, ``development`` by default.
"""

from os import environ

from split_settings.tools import include, optional

# Managing environment via `DJANGO_ENV` variable:
environ.setdefault('DJANGO_ENV', 'development')
_ENV = environ['DJANGO_ENV']

_base_settings = (
    'components/common.py',
    'components/database.py',
    'components/logging.py',
    # Select the right env:
    f'environments/{_ENV}.py',
    # Optionally override some settings:
    optional('environments/local.py'),
)

# Include settings:
include(*_base_settings)
