# ==========================================
# apps/catalog/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from apps.catalog.models import ServiceCategory, ProductCategory, Service, Product


@admin.register(ServiceCategory, ProductCategory)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'store', 'created_at']
    list_filter = ['store']
    search_fields = ['name']


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    """Admin interface for salon services."""

    list_display = ['name', 'store', 'category', 'price', 'duration_minutes', 'is_active']
    list_filter = ['is_active', 'store', 'category']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['store', 'name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for retail products."""

    list_display = ['name', 'store', 'brand', 'barcode', 'price', 'stock_badge', 'is_active']
    list_filter = ['is_active', 'store', 'category', 'brand']
    search_fields = ['name', 'barcode', 'brand']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['store', 'name']

    def stock_badge(self, obj):
        """Highlight products at or below minimum stock."""
        if obj.is_low_stock:
            return format_html(
                '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">{} (low)</span>',
                obj.stock
            )
        return obj.stock
    stock_badge.short_description = 'Stock'
    stock_badge.admin_order_field = 'stock'
