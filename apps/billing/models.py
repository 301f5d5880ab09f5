# ==========================================
# apps/billing/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    CARD = 'card', 'Card'
    UPI = 'upi', 'UPI'


class LineKind(models.TextChoices):
    SERVICE = 'service', 'Service'
    PRODUCT = 'product', 'Product'


class Transaction(models.Model):
    """
    Completed sale.

    Amounts are the calculator's output at checkout time and are never
    recomputed; rows are not updated or deleted after creation.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    store = models.ForeignKey('stores.Store', on_delete=models.PROTECT, related_name='transactions')
    customer = models.ForeignKey(
        'customers.Customer',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions'
    )
    staff = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='transactions'
    )
    invoice_number = models.CharField(max_length=32, editable=False)

    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    discount_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    membership_discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text='Membership discount percentage applied'
    )
    redemption_value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    points_earned = models.PositiveIntegerField(default=0)
    points_redeemed = models.PositiveIntegerField(default=0)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'transactions'
        unique_together = [['store', 'invoice_number']]
        indexes = [
            models.Index(fields=['store', '-created_at'], name='transactions_store_created_idx'),
            models.Index(fields=['customer', '-created_at'], name='transactions_customer_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.invoice_number} ({self.total_amount})"


class TransactionItem(models.Model):
    """Line of a transaction with the name and price as billed."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction = models.ForeignKey(Transaction, on_delete=models.CASCADE, related_name='items')
    kind = models.CharField(max_length=10, choices=LineKind.choices)
    service = models.ForeignKey(
        'catalog.Service',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transaction_items'
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transaction_items'
    )
    item_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        db_table = 'transaction_items'

    def __str__(self):
        return f"{self.quantity} x {self.item_name}"
