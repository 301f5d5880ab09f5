# ==========================================
# apps/stores/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal
import uuid

from apps.billing.calculator import LoyaltyRules, TaxConfig


class StaffRole(models.TextChoices):
    STORE_MANAGER = 'store_manager', 'Store Manager'
    CASHIER = 'cashier', 'Cashier'


class Store(models.Model):
    """Salon branch with its own catalog, staff and tax configuration."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=50, blank=True)
    zip_code = models.CharField(max_length=10, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    description = models.TextField(blank=True)
    gst_number = models.CharField(max_length=20, blank=True)
    theme_color = models.CharField(max_length=7, default='#8B5CF6')
    is_active = models.BooleanField(default=True)

    # Tax configuration
    tax_enabled = models.BooleanField(default=True)
    tax_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('18.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'stores'
        indexes = [
            models.Index(fields=['is_active', 'name'], name='stores_active_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def get_tax_config(self) -> TaxConfig:
        return TaxConfig(enabled=self.tax_enabled, rate=self.tax_rate)

    def get_loyalty_rules(self) -> LoyaltyRules:
        """Store loyalty rules, or calculator defaults when none are configured."""
        try:
            return self.loyalty_settings.to_rules()
        except LoyaltySettings.DoesNotExist:
            return LoyaltyRules()

    def has_staff(self, user):
        return self.staff.filter(user=user).exists()

    def get_staff_role(self, user):
        try:
            return self.staff.get(user=user).role
        except StoreStaff.DoesNotExist:
            return None

    def is_manager(self, user):
        if user.is_super_admin:
            return True
        return self.get_staff_role(user) == StaffRole.STORE_MANAGER


class StoreStaff(models.Model):
    """Staff assignment to a store with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name='staff')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='store_assignments')
    role = models.CharField(max_length=20, choices=StaffRole.choices, default=StaffRole.CASHIER)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'store_staff'
        unique_together = [['store', 'user']]
        indexes = [
            models.Index(fields=['store', 'role'], name='store_staff_store_role_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.user.get_display_name()} at {self.store.name} ({self.role})"


class LoyaltySettings(models.Model):
    """Per-store loyalty point earning and redemption rates."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.OneToOneField(Store, on_delete=models.CASCADE, related_name='loyalty_settings')

    # 0.01 = 1 point per 100 currency units spent
    points_per_currency_unit = models.DecimalField(
        max_digits=6,
        decimal_places=4,
        default=Decimal('0.0100'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    currency_per_point = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        default=Decimal('1.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    min_redemption_points = models.PositiveIntegerField(default=0)
    max_redemption_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('100.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'loyalty_settings'
        verbose_name_plural = 'loyalty settings'

    def __str__(self):
        return f"Loyalty settings for {self.store.name}"

    def to_rules(self) -> LoyaltyRules:
        return LoyaltyRules(
            base_points_rate=self.points_per_currency_unit,
            currency_per_point=self.currency_per_point,
            min_redemption_points=self.min_redemption_points,
            max_redemption_percentage=self.max_redemption_percentage,
        )
