from django.conf import settings
from rest_framework import serializers
from apps.accounts.serializers import UserMinimalSerializer
from .calculator import ItemKind
from .models import Transaction, TransactionItem, PaymentMethod


# =============================================================================
# Input Serializers
# =============================================================================

class CartItemSerializer(serializers.Serializer):
    """One cart line; price comes from the catalog, never the client."""

    kind = serializers.ChoiceField(choices=[kind.value for kind in ItemKind])
    item_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class QuoteSerializer(serializers.Serializer):
    """Validate a bill quote request."""

    store = serializers.UUIDField()
    customer = serializers.UUIDField(required=False, allow_null=True, default=None)
    items = CartItemSerializer(many=True, allow_empty=False)
    points_to_redeem = serializers.IntegerField(min_value=0, default=0)


class CheckoutSerializer(QuoteSerializer):
    """Validate a checkout request."""

    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class TransactionQuerySerializer(serializers.Serializer):
    """Validate transaction list filters."""

    store = serializers.UUIDField(required=False)
    customer = serializers.UUIDField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({'date_from': 'Must be on or before date_to.'})
        return attrs


class InvoiceLookupSerializer(serializers.Serializer):
    """Validate the optional store filter of an invoice lookup."""

    store = serializers.UUIDField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class BillLineSerializer(serializers.Serializer):
    kind = serializers.CharField(source='kind.value')
    item_id = serializers.UUIDField()
    name = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class BillSerializer(serializers.Serializer):
    """Serializer for a calculated, unsaved bill."""

    line_items = BillLineSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    discount_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    redemption_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    taxable_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    tax_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    points_earned = serializers.IntegerField()
    points_redeemed = serializers.IntegerField()
    currency = serializers.SerializerMethodField()

    def get_currency(self, obj):
        return settings.POS_CURRENCY


class TransactionItemSerializer(serializers.ModelSerializer):

    class Meta:
        model = TransactionItem
        fields = ['id', 'kind', 'service', 'product', 'item_name', 'quantity', 'unit_price', 'total_price']
        read_only_fields = fields


class TransactionSerializer(serializers.ModelSerializer):
    """Full transaction with items."""

    items = TransactionItemSerializer(many=True, read_only=True)
    staff = UserMinimalSerializer(read_only=True)
    customer_name = serializers.CharField(source='customer.full_name', read_only=True, default=None)
    store_name = serializers.CharField(source='store.name', read_only=True)
    currency = serializers.SerializerMethodField()

    class Meta:
        model = Transaction
        fields = [
            'id',
            'invoice_number',
            'store',
            'store_name',
            'customer',
            'customer_name',
            'staff',
            'subtotal',
            'discount_amount',
            'membership_discount',
            'redemption_value',
            'tax_amount',
            'total_amount',
            'currency',
            'payment_method',
            'points_earned',
            'points_redeemed',
            'notes',
            'items',
            'created_at',
        ]
        read_only_fields = fields

    def get_currency(self, obj):
        return settings.POS_CURRENCY


class TransactionListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    customer_name = serializers.CharField(source='customer.full_name', read_only=True, default=None)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'invoice_number',
            'store',
            'customer',
            'customer_name',
            'total_amount',
            'payment_method',
            'created_at',
        ]
        read_only_fields = fields
