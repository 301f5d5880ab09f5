# ==========================================
# apps/customers/admin.py
# ==========================================

from django.contrib import admin
from apps.customers.models import Customer, MembershipPlan, CustomerMembership, LoyaltyLedgerEntry


class CustomerMembershipInline(admin.TabularInline):
    model = CustomerMembership
    extra = 0
    fields = ['plan', 'start_date', 'end_date', 'is_active']


class LoyaltyLedgerInline(admin.TabularInline):
    """Read-only ledger; balances change through the loyalty service."""
    model = LoyaltyLedgerEntry
    fk_name = 'customer'
    extra = 0
    can_delete = False
    fields = ['kind', 'points', 'balance_after', 'transaction', 'note', 'created_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin interface for customers."""

    list_display = ['full_name', 'mobile', 'email', 'loyalty_points', 'total_visits', 'total_spent', 'created_at']
    search_fields = ['first_name', 'last_name', 'mobile', 'email']
    readonly_fields = ['loyalty_points', 'total_visits', 'total_spent', 'created_at', 'updated_at']
    inlines = [CustomerMembershipInline, LoyaltyLedgerInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']


@admin.register(MembershipPlan)
class MembershipPlanAdmin(admin.ModelAdmin):
    list_display = ['name', 'store', 'discount_percentage', 'points_multiplier', 'validity_days', 'price', 'is_active']
    list_filter = ['is_active', 'store']
    search_fields = ['name']


@admin.register(CustomerMembership)
class CustomerMembershipAdmin(admin.ModelAdmin):
    list_display = ['customer', 'plan', 'start_date', 'end_date', 'is_active']
    list_filter = ['is_active', 'plan__store']
    search_fields = ['customer__first_name', 'customer__mobile', 'plan__name']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('customer', 'plan')
