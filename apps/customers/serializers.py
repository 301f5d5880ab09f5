from decimal import Decimal

from rest_framework import serializers
from .models import Customer, MembershipPlan, CustomerMembership, LoyaltyLedgerEntry


# =============================================================================
# Input Serializers
# =============================================================================

class CustomerCreateSerializer(serializers.Serializer):
    """Validate new customer registration."""

    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    mobile = serializers.RegexField(r'^\+?\d{7,15}$', max_length=15)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    date_of_birth = serializers.DateField(required=False, allow_null=True, default=None)
    address = serializers.CharField(required=False, allow_blank=True, default='')


class CustomerSearchSerializer(serializers.Serializer):
    q = serializers.CharField(min_length=1, max_length=100)


class EnrollSerializer(serializers.Serializer):
    """Validate membership enrolment."""

    plan_id = serializers.UUIDField()
    start_date = serializers.DateField(required=False, allow_null=True, default=None)


class PointsAdjustmentSerializer(serializers.Serializer):
    """Validate a manual loyalty correction."""

    points = serializers.IntegerField()
    note = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

    def validate_points(self, value):
        if value == 0:
            raise serializers.ValidationError("Adjustment cannot be zero.")
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class CustomerSerializer(serializers.ModelSerializer):
    """Main serializer for customers; loyalty counters are read-only."""

    full_name = serializers.CharField(read_only=True)

    class Meta:
        model = Customer
        fields = [
            'id',
            'first_name',
            'last_name',
            'full_name',
            'mobile',
            'email',
            'date_of_birth',
            'address',
            'loyalty_points',
            'total_visits',
            'total_spent',
            'created_at',
            'updated_at',
        ]
        read_only_fields = [
            'id',
            'full_name',
            'loyalty_points',
            'total_visits',
            'total_spent',
            'created_at',
            'updated_at',
        ]


class MembershipPlanSerializer(serializers.ModelSerializer):

    class Meta:
        model = MembershipPlan
        fields = [
            'id',
            'store',
            'name',
            'description',
            'discount_percentage',
            'points_multiplier',
            'validity_days',
            'price',
            'benefits',
            'is_active',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def validate_benefits(self, value):
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise serializers.ValidationError("Benefits must be a list of strings.")
        return value

    def validate_points_multiplier(self, value):
        if value < Decimal('0'):
            raise serializers.ValidationError("Multiplier cannot be negative.")
        return value


class CustomerMembershipSerializer(serializers.ModelSerializer):
    plan = MembershipPlanSerializer(read_only=True)

    class Meta:
        model = CustomerMembership
        fields = ['id', 'plan', 'start_date', 'end_date', 'is_active', 'created_at']
        read_only_fields = fields


class LoyaltyLedgerEntrySerializer(serializers.ModelSerializer):
    invoice_number = serializers.CharField(source='transaction.invoice_number', read_only=True, default=None)

    class Meta:
        model = LoyaltyLedgerEntry
        fields = ['id', 'kind', 'points', 'balance_after', 'note', 'invoice_number', 'created_at']
        read_only_fields = fields
