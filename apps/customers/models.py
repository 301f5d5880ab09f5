# ==========================================
# apps/customers/models.py
# ==========================================

from datetime import date
from decimal import Decimal
import uuid

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator


class Customer(models.Model):
    """Salon client. Identified at the counter by mobile number."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100, blank=True)
    mobile = models.CharField(max_length=15, unique=True)
    email = models.EmailField(blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    address = models.TextField(blank=True)

    # Loyalty counters, changed only through apps.customers.services.loyalty
    loyalty_points = models.PositiveIntegerField(default=0)
    total_visits = models.PositiveIntegerField(default=0)
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='customers_name_idx'),
        ]
        ordering = ['first_name', 'last_name']

    def __str__(self):
        return f"{self.full_name} ({self.mobile})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


class MembershipPlan(models.Model):
    """Paid membership tier offered by a store."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey('stores.Store', on_delete=models.CASCADE, related_name='membership_plans')
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    points_multiplier = models.DecimalField(
        max_digits=4,
        decimal_places=2,
        default=Decimal('1.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    validity_days = models.PositiveIntegerField(default=365)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    benefits = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'membership_plans'
        unique_together = [['store', 'name']]
        ordering = ['price']

    def __str__(self):
        return f"{self.name} ({self.discount_percentage}% off)"


class CustomerMembership(models.Model):
    """Enrolment of a customer in a plan for a date range."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='memberships')
    plan = models.ForeignKey(MembershipPlan, on_delete=models.PROTECT, related_name='enrolments')
    start_date = models.DateField()
    end_date = models.DateField()
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'customer_memberships'
        indexes = [
            models.Index(fields=['customer', 'is_active'], name='cust_memb_customer_active_idx'),
        ]
        ordering = ['-start_date']

    def __str__(self):
        return f"{self.customer.full_name} - {self.plan.name} until {self.end_date}"

    def is_valid_on(self, on_date: date) -> bool:
        return self.is_active and self.start_date <= on_date <= self.end_date


class LedgerKind(models.TextChoices):
    EARN = 'earn', 'Earned'
    REDEEM = 'redeem', 'Redeemed'
    ADJUST = 'adjust', 'Adjusted'


class LoyaltyLedgerEntry(models.Model):
    """Append-only record of every loyalty balance change."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name='loyalty_entries')
    transaction = models.ForeignKey(
        'billing.Transaction',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='loyalty_entries'
    )
    kind = models.CharField(max_length=10, choices=LedgerKind.choices)
    points = models.IntegerField()
    balance_after = models.PositiveIntegerField()
    note = models.CharField(max_length=255, blank=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='loyalty_adjustments'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'loyalty_ledger'
        indexes = [
            models.Index(fields=['customer', '-created_at'], name='loyalty_ledger_customer_idx'),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'loyalty ledger entries'

    def __str__(self):
        return f"{self.customer.full_name}: {self.points:+d} ({self.kind})"
