from decimal import Decimal

from rest_framework import serializers
from .models import Store, StoreStaff, LoyaltySettings, StaffRole
from apps.accounts.serializers import UserMinimalSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class TaxConfigSerializer(serializers.Serializer):
    """Validate tax configuration updates."""

    enabled = serializers.BooleanField()
    rate = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0.00'),
        max_value=Decimal('100.00')
    )


class AssignStaffSerializer(serializers.Serializer):
    """Validate staff assignment."""

    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(choices=StaffRole.choices, default=StaffRole.CASHIER)


class RemoveStaffSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()


# =============================================================================
# Output Serializers
# =============================================================================

class LoyaltySettingsSerializer(serializers.ModelSerializer):
    """Serializer for loyalty settings (also used for updates)."""

    class Meta:
        model = LoyaltySettings
        fields = [
            'points_per_currency_unit',
            'currency_per_point',
            'min_redemption_points',
            'max_redemption_percentage',
            'updated_at',
        ]
        read_only_fields = ['updated_at']


class StoreSerializer(serializers.ModelSerializer):
    """Main serializer for stores."""

    staff_count = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'address',
            'city',
            'state',
            'zip_code',
            'phone',
            'email',
            'description',
            'gst_number',
            'theme_color',
            'is_active',
            'tax_enabled',
            'tax_rate',
            'staff_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'staff_count', 'created_at', 'updated_at']
        # Unchecked booleans in form posts would otherwise read as False
        extra_kwargs = {
            'tax_enabled': {'default': True},
            'is_active': {'default': True},
        }

    def get_staff_count(self, obj):
        return obj.staff.count()


class StoreListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    class Meta:
        model = Store
        fields = ['id', 'name', 'city', 'phone', 'theme_color', 'is_active']
        read_only_fields = fields


class StoreStaffSerializer(serializers.ModelSerializer):
    """Serializer for staff assignments."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = StoreStaff
        fields = ['id', 'store', 'user', 'role', 'created_at']
        read_only_fields = fields
