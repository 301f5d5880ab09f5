"""
Management command to create sample salon data for trying out the API.

Usage:
    python manage.py create_sample_data

This creates:
- 3 staff accounts (admin, manager, cashier)
- 2 stores with tax and loyalty settings
- Service and product catalogs
- Membership plans
- Customers, one of them enrolled in a plan
"""

from django.core.management.base import BaseCommand
from django.db import transaction
from decimal import Decimal

from apps.accounts.models import User, UserRole
from apps.catalog.models import ServiceCategory, ProductCategory, Service, Product
from apps.customers.models import Customer, MembershipPlan
from apps.customers.services import enroll_customer
from apps.stores.models import Store, StoreStaff, StaffRole, LoyaltySettings


STORES = [
    {
        'name': 'Glamour Salon & Spa',
        'address': '123 Beauty Street',
        'city': 'Mumbai',
        'state': 'Maharashtra',
        'zip_code': '400001',
        'phone': '+91 9876543210',
        'email': 'info@glamoursalon.example.com',
        'min_redemption': 100,
    },
    {
        'name': 'Elite Nail Studio',
        'address': '456 Fashion Avenue',
        'city': 'Delhi',
        'state': 'Delhi',
        'zip_code': '110001',
        'phone': '+91 9876543211',
        'email': 'contact@elitenails.example.com',
        'min_redemption': 50,
    },
]

SERVICES = {
    'Hair': [
        ('Hair Cut & Styling', '899.00', 60),
        ('Hair Color & Highlights', '2499.00', 120),
        ('Hair Spa Treatment', '1599.00', 90),
    ],
    'Facial': [
        ('Classic Facial', '1299.00', 75),
        ('Gold Facial', '2199.00', 90),
    ],
    'Nails': [
        ('Manicure', '599.00', 45),
        ('Pedicure', '799.00', 60),
    ],
}

PRODUCTS = {
    'Hair Care': [
        ('Argan Oil Shampoo', 'Moroccanoil', '1450.00', '900.00', '890103000001', 24),
        ('Keratin Conditioner', 'Loreal', '850.00', '520.00', '890103000002', 18),
    ],
    'Skin Care': [
        ('Vitamin C Serum', 'Plum', '690.00', '410.00', '890103000003', 4),
    ],
}

PLANS = [
    ('Silver', '10.00', '1.50', 180, '1999.00'),
    ('Gold', '15.00', '2.00', 365, '2999.00'),
    ('VIP', '25.00', '3.00', 730, '5999.00'),
]

CUSTOMERS = [
    ('Priya', 'Sharma', '9845012345', 'priya@example.com'),
    ('Rahul', 'Verma', '9845012346', ''),
    ('Ananya', 'Iyer', '9845012347', 'ananya@example.com'),
]


class Command(BaseCommand):
    help = 'Create sample stores, catalog, plans and customers'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        users = self.create_users()
        stores = self.create_stores(users)
        for store in stores:
            self.create_catalog(store)
        plans = self.create_plans(stores[0])
        self.create_customers(plans)

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test accounts:')
        self.stdout.write('  admin@salon.example.com / admin123 (super admin)')
        self.stdout.write('  manager@salon.example.com / password123 (store manager)')
        self.stdout.write('  cashier@salon.example.com / password123 (cashier)')

    def clear_data(self):
        """Remove sample stores (cascading to catalog and plans), customers and users."""
        from apps.billing.models import Transaction

        Transaction.objects.filter(store__name__in=[s['name'] for s in STORES]).delete()
        Store.objects.filter(name__in=[s['name'] for s in STORES]).delete()
        Customer.objects.filter(mobile__in=[c[2] for c in CUSTOMERS]).delete()
        User.objects.filter(email__endswith='@salon.example.com').delete()

    def create_users(self):
        self.stdout.write('  Creating users...')

        accounts = {
            'admin': ('admin@salon.example.com', 'Admin User', UserRole.SUPER_ADMIN, 'admin123'),
            'manager': ('manager@salon.example.com', 'Meera Manager', UserRole.STORE_MANAGER, 'password123'),
            'cashier': ('cashier@salon.example.com', 'Kiran Cashier', UserRole.CASHIER, 'password123'),
        }
        users = {}
        for key, (email, name, role, password) in accounts.items():
            user, _ = User.objects.get_or_create(
                email=email,
                defaults={
                    'display_name': name,
                    'role': role,
                    'is_staff': role == UserRole.SUPER_ADMIN,
                    'is_superuser': role == UserRole.SUPER_ADMIN,
                },
            )
            user.set_password(password)
            user.save()
            users[key] = user
        return users

    def create_stores(self, users):
        self.stdout.write('  Creating stores...')

        stores = []
        for data in STORES:
            data = dict(data)
            min_redemption = data.pop('min_redemption')
            store, _ = Store.objects.get_or_create(name=data['name'], defaults=data)
            LoyaltySettings.objects.update_or_create(
                store=store,
                defaults={'min_redemption_points': min_redemption},
            )
            StoreStaff.objects.get_or_create(
                store=store, user=users['manager'], defaults={'role': StaffRole.STORE_MANAGER}
            )
            StoreStaff.objects.get_or_create(
                store=store, user=users['cashier'], defaults={'role': StaffRole.CASHIER}
            )
            stores.append(store)
        return stores

    def create_catalog(self, store):
        self.stdout.write(f'  Creating catalog for {store.name}...')

        for category_name, services in SERVICES.items():
            category, _ = ServiceCategory.objects.get_or_create(store=store, name=category_name)
            for name, price, duration in services:
                Service.objects.get_or_create(
                    store=store,
                    name=name,
                    defaults={
                        'category': category,
                        'price': Decimal(price),
                        'duration_minutes': duration,
                    },
                )

        for category_name, products in PRODUCTS.items():
            category, _ = ProductCategory.objects.get_or_create(store=store, name=category_name)
            for name, brand, price, cost, barcode, stock in products:
                Product.objects.get_or_create(
                    store=store,
                    name=name,
                    defaults={
                        'category': category,
                        'brand': brand,
                        'price': Decimal(price),
                        'cost': Decimal(cost),
                        'barcode': _barcode_for(store, barcode),
                        'stock': stock,
                    },
                )

    def create_plans(self, store):
        self.stdout.write(f'  Creating membership plans for {store.name}...')

        plans = []
        for name, discount, multiplier, days, price in PLANS:
            plan, _ = MembershipPlan.objects.get_or_create(
                store=store,
                name=name,
                defaults={
                    'description': f'{name} membership with {discount}% discount',
                    'discount_percentage': Decimal(discount),
                    'points_multiplier': Decimal(multiplier),
                    'validity_days': days,
                    'price': Decimal(price),
                },
            )
            plans.append(plan)
        return plans

    def create_customers(self, plans):
        self.stdout.write('  Creating customers...')

        customers = []
        for first_name, last_name, mobile, email in CUSTOMERS:
            customer, _ = Customer.objects.get_or_create(
                mobile=mobile,
                defaults={'first_name': first_name, 'last_name': last_name, 'email': email},
            )
            customers.append(customer)

        gold = next(plan for plan in plans if plan.name == 'Gold')
        if not customers[0].memberships.filter(plan=gold, is_active=True).exists():
            enroll_customer(customer_id=customers[0].id, plan_id=gold.id)


def _barcode_for(store, stem):
    """Barcodes are unique across stores; the last digit is the store's position."""
    position = [s['name'] for s in STORES].index(store.name) + 1
    return f'{stem}{position}'
