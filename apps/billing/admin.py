# ==========================================
# apps/billing/admin.py
# ==========================================

from django.contrib import admin
from apps.billing.models import Transaction, TransactionItem


class TransactionItemInline(admin.TabularInline):
    model = TransactionItem
    extra = 0
    can_delete = False
    fields = ['kind', 'item_name', 'quantity', 'unit_price', 'total_price']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Read-only admin for completed sales."""

    list_display = [
        'invoice_number',
        'store',
        'customer',
        'total_amount',
        'payment_method',
        'points_earned',
        'points_redeemed',
        'created_at'
    ]
    list_filter = ['payment_method', 'store', 'created_at']
    search_fields = ['invoice_number', 'customer__mobile', 'customer__first_name']
    inlines = [TransactionItemInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Sale', {
            'fields': ('invoice_number', 'store', 'customer', 'staff', 'payment_method', 'notes')
        }),
        ('Amounts', {
            'fields': (
                'subtotal',
                'membership_discount',
                'discount_amount',
                'redemption_value',
                'tax_amount',
                'total_amount',
            )
        }),
        ('Loyalty', {
            'fields': ('points_earned', 'points_redeemed')
        }),
        ('Metadata', {
            'fields': ('created_at',),
            'classes': ('collapse',)
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('store', 'customer', 'staff')
