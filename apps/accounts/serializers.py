from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'mobile',
            'display_name',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'role', 'created_at', 'last_login']


class UserLoginSerializer(serializers.Serializer):
    """Serializer for staff login (email or mobile)."""

    login = serializers.CharField(required=True, max_length=255)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class StaffCreateSerializer(serializers.Serializer):
    """Input serializer for creating staff accounts (super admin only)."""

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    mobile = serializers.CharField(max_length=15, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.CASHIER)


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name', 'role']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()
