# ==========================================
# apps/stores/admin.py
# ==========================================

from django.contrib import admin
from apps.stores.models import Store, StoreStaff, LoyaltySettings


class StoreStaffInline(admin.TabularInline):
    """Inline admin for staff assignments."""
    model = StoreStaff
    extra = 0
    fields = ['user', 'role', 'created_at']
    readonly_fields = ['created_at']


class LoyaltySettingsInline(admin.StackedInline):
    model = LoyaltySettings
    can_delete = False
    extra = 0


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """Admin interface for Stores."""

    list_display = [
        'name',
        'city',
        'phone',
        'tax_enabled',
        'tax_rate',
        'staff_count',
        'is_active',
        'created_at'
    ]
    list_filter = ['is_active', 'tax_enabled', 'city']
    search_fields = ['name', 'city', 'phone', 'gst_number']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [StoreStaffInline, LoyaltySettingsInline]
    ordering = ['name']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'theme_color', 'is_active')
        }),
        ('Contact', {
            'fields': ('address', 'city', 'state', 'zip_code', 'phone', 'email')
        }),
        ('Tax', {
            'fields': ('gst_number', 'tax_enabled', 'tax_rate')
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def staff_count(self, obj):
        """Show number of assigned staff."""
        return obj.staff.count()
    staff_count.short_description = 'Staff'


@admin.register(StoreStaff)
class StoreStaffAdmin(admin.ModelAdmin):
    """Admin interface for staff assignments."""

    list_display = ['user', 'store', 'role', 'created_at']
    list_filter = ['role', 'store']
    search_fields = ['user__email', 'user__display_name', 'store__name']
    readonly_fields = ['created_at']
    ordering = ['-created_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'store')
