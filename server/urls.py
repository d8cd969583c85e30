"""Main URL mapping configuration file.

The data-access layer exposes no views of its own; only the admin is
routed here.
"""

from django.contrib import admin
from django.urls import path

admin.autodiscover()

urlpatterns = [
    path('admin/', admin.site.urls),
]
