# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from apps.stores.models import StoreStaff
from .models import User, UserRole


ROLE_COLORS = {
    UserRole.SUPER_ADMIN: '#8B5CF6',
    UserRole.STORE_MANAGER: '#2563EB',
    UserRole.CASHIER: '#64748B',
}


def _badge(label, color):
    return format_html(
        '<span style="background: {}; color: white; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        color, label
    )


class StoreAssignmentInline(admin.TabularInline):
    model = StoreStaff
    fk_name = 'user'
    extra = 0
    fields = ['store', 'role', 'created_at']
    readonly_fields = ['created_at']
    autocomplete_fields = ['store']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Staff accounts with their store assignments.

    Super admins see every account; the inline lists which stores an
    account works at and in which role.
    """

    list_display = [
        'email',
        'display_name',
        'mobile',
        'role_badge',
        'store_names',
        'status_badge',
        'last_login',
    ]
    list_filter = ['role', 'is_active', 'store_assignments__store']
    search_fields = ['email', 'mobile', 'display_name']
    ordering = ['email']
    inlines = [StoreAssignmentInline]

    fieldsets = (
        (None, {
            'fields': ('email', 'mobile', 'display_name', 'password')
        }),
        ('Role', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser'),
        }),
        ('Activity', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('New staff account', {
            'classes': ('wide',),
            'fields': ('email', 'mobile', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = []

    def get_queryset(self, request):
        return super().get_queryset(request).prefetch_related('store_assignments__store')

    @admin.display(description='Role', ordering='role')
    def role_badge(self, obj):
        return _badge(obj.get_role_display(), ROLE_COLORS.get(obj.role, '#999'))

    @admin.display(description='Stores')
    def store_names(self, obj):
        return ', '.join(a.store.name for a in obj.store_assignments.all()) or '-'

    @admin.display(description='Status', ordering='is_active')
    def status_badge(self, obj):
        if obj.is_active:
            return _badge('Active', '#6B8E5E')
        return _badge('Inactive', '#B85C5C')

    actions = ['deactivate_accounts']

    @admin.action(description='Deactivate selected accounts')
    def deactivate_accounts(self, request, queryset):
        """Deactivate accounts, never the super admins."""
        count = queryset.exclude(role=UserRole.SUPER_ADMIN).filter(is_superuser=False).update(is_active=False)
        self.message_user(request, f'Deactivated {count} account(s).')
