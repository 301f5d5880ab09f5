import pytest
from django.urls import reverse
from rest_framework import status
from apps.customers.models import Customer, MembershipPlan


# =============================================================================
# Customer Tests
# =============================================================================

@pytest.mark.django_db
class TestCustomerEndpoints:
    """Tests for /api/customers/"""

    def test_register_customer(self, cashier_client):
        url = reverse('customers:customer-list')
        response = cashier_client.post(url, {
            'first_name': 'Anita',
            'last_name': 'Rao',
            'mobile': '9811122233',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['loyalty_points'] == 0
        assert Customer.objects.filter(mobile='9811122233').exists()

    def test_duplicate_mobile(self, cashier_client, customer):
        url = reverse('customers:customer-list')
        response = cashier_client.post(url, {'first_name': 'Copy', 'mobile': customer.mobile})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_invalid_mobile(self, cashier_client):
        url = reverse('customers:customer-list')
        response = cashier_client.post(url, {'first_name': 'Bad', 'mobile': 'call me'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unauthenticated(self, api_client):
        url = reverse('customers:customer-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_search(self, cashier_client, customer, other_customer):
        url = reverse('customers:customer-search')
        response = cashier_client.get(url, {'q': 'Priya'})

        assert response.status_code == status.HTTP_200_OK
        assert [c['id'] for c in response.data] == [str(customer.id)]

    def test_search_requires_query(self, cashier_client):
        url = reverse('customers:customer-search')
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_loyalty_points_not_writable(self, cashier_client, customer):
        url = reverse('customers:customer-detail', kwargs={'pk': customer.id})
        response = cashier_client.patch(url, {'loyalty_points': 99999, 'email': 'new@example.com'})

        assert response.status_code == status.HTTP_200_OK
        customer.refresh_from_db()
        assert customer.loyalty_points == 120
        assert customer.email == 'new@example.com'


@pytest.mark.django_db
class TestCustomerLoyaltyEndpoints:

    def test_manager_adjusts_points(self, manager_client, salon_store, customer):
        url = reverse('customers:customer-loyalty', kwargs={'pk': customer.id})
        response = manager_client.post(url, {'points': 30, 'note': 'Birthday bonus'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['loyalty_points'] == 150
        assert response.data['entries'][0]['kind'] == 'adjust'

    def test_cashier_cannot_adjust(self, cashier_client, salon_store, customer):
        url = reverse('customers:customer-loyalty', kwargs={'pk': customer.id})
        response = cashier_client.post(url, {'points': 30})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_adjust_below_zero(self, manager_client, salon_store, customer):
        url = reverse('customers:customer-loyalty', kwargs={'pk': customer.id})
        response = manager_client.post(url, {'points': -500})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestMembershipEndpoints:

    def test_enroll(self, cashier_client, customer, gold_plan):
        url = reverse('customers:customer-enroll', kwargs={'pk': customer.id})
        response = cashier_client.post(url, {'plan_id': str(gold_plan.id), 'start_date': '2025-01-01'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['end_date'] == '2026-01-01'
        assert response.data['plan']['name'] == 'Gold'

    def test_enroll_in_foreign_plan(self, cashier_client, customer, second_store):
        plan = MembershipPlan.objects.create(store=second_store, name='Elsewhere')
        url = reverse('customers:customer-enroll', kwargs={'pk': customer.id})
        response = cashier_client.post(url, {'plan_id': str(plan.id)})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_membership_history(self, cashier_client, customer, gold_membership):
        url = reverse('customers:customer-memberships', kwargs={'pk': customer.id})
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['id'] == str(gold_membership.id)

    def test_list_plans(self, cashier_client, salon_store, gold_plan, silver_plan):
        url = reverse('customers:plan-list')
        response = cashier_client.get(url, {'store': str(salon_store.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data['results']] == ['Silver', 'Gold']

    def test_manager_creates_plan(self, manager_client, salon_store):
        url = reverse('customers:plan-list')
        response = manager_client.post(url, {
            'store': str(salon_store.id),
            'name': 'Platinum',
            'discount_percentage': '20.00',
            'points_multiplier': '3.00',
            'price': '4999.00',
            'benefits': ['Free head massage'],
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['validity_days'] == 365

    def test_cashier_cannot_create_plan(self, cashier_client, salon_store):
        url = reverse('customers:plan-list')
        response = cashier_client.post(url, {'store': str(salon_store.id), 'name': 'Cheap'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_discount_over_100_rejected(self, manager_client, salon_store):
        url = reverse('customers:plan-list')
        response = manager_client.post(url, {
            'store': str(salon_store.id),
            'name': 'Too Good',
            'discount_percentage': '120.00',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_retires_plan(self, manager_client, gold_plan):
        url = reverse('customers:plan-detail', kwargs={'pk': gold_plan.id})
        response = manager_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        gold_plan.refresh_from_db()
        assert gold_plan.is_active is False
