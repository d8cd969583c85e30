"""Django admin configuration for accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from server.apps.accounts.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for User model."""

    list_display = [
        'username',
        'email',
        'id',
        'is_active',
        'date_joined',
    ]

    search_fields = [
        'id',
        'username',
        'email',
    ]

    readonly_fields = ['id']
