# Generated manually for salon POS stores

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Store',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('address', models.TextField(blank=True)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=50)),
                ('zip_code', models.CharField(blank=True, max_length=10)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('description', models.TextField(blank=True)),
                ('gst_number', models.CharField(blank=True, max_length=20)),
                ('theme_color', models.CharField(default='#8B5CF6', max_length=7)),
                ('is_active', models.BooleanField(default=True)),
                ('tax_enabled', models.BooleanField(default=True)),
                ('tax_rate', models.DecimalField(decimal_places=2, default=Decimal('18.00'), max_digits=5, validators=[MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'stores',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['is_active', 'name'], name='stores_active_name_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StoreStaff',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('role', models.CharField(choices=[('store_manager', 'Store Manager'), ('cashier', 'Cashier')], default='cashier', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='staff', to='stores.store')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='store_assignments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'store_staff',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['store', 'role'], name='store_staff_store_role_idx'),
                ],
                'unique_together': {('store', 'user')},
            },
        ),
        migrations.CreateModel(
            name='LoyaltySettings',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('points_per_currency_unit', models.DecimalField(decimal_places=4, default=Decimal('0.0100'), max_digits=6, validators=[MinValueValidator(Decimal('0'))])),
                ('currency_per_point', models.DecimalField(decimal_places=2, default=Decimal('1.00'), max_digits=6, validators=[MinValueValidator(Decimal('0'))])),
                ('min_redemption_points', models.PositiveIntegerField(default=0)),
                ('max_redemption_percentage', models.DecimalField(decimal_places=2, default=Decimal('100.00'), max_digits=5, validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('store', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='loyalty_settings', to='stores.store')),
            ],
            options={
                'db_table': 'loyalty_settings',
                'verbose_name_plural': 'loyalty settings',
            },
        ),
    ]
