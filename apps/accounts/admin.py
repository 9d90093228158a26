# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for staff accounts.

    Provides:
    - User listing with role and status badges
    - Filtering by role and status
    - Bulk actions for promoting/demoting and (de)activating accounts
    """

    list_display = [
        'username',
        'display_name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_superuser',
        'created_at',
    ]

    search_fields = [
        'username',
        'display_name',
    ]

    ordering = ['username']

    fieldsets = (
        ('Basic Information', {
            'fields': ('username', 'display_name', 'password')
        }),
        ('Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('username', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        if obj.role == UserRole.ADMIN:
            bg, fg = '#1E6091', 'white'
        else:
            bg, fg = '#ccc', '#444'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_role_display()
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = [
        'make_admins',
        'make_viewers',
        'deactivate_users',
    ]

    @admin.action(description='Grant admin role')
    def make_admins(self, request, queryset):
        count = queryset.update(role=UserRole.ADMIN)
        self.message_user(request, f'Promoted {count} user(s) to admin.')

    @admin.action(description='Set viewer role')
    def make_viewers(self, request, queryset):
        """Demote selected users (excludes superusers for safety)."""
        count = queryset.filter(is_superuser=False).update(role=UserRole.VIEWER)
        self.message_user(request, f'Set {count} user(s) to viewer.')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s) for safety.'
        self.message_user(request, msg)
