import pytest
from datetime import timedelta
from decimal import Decimal
from django.urls import reverse
from django.utils import timezone
from rest_framework import status


# =============================================================================
# Dashboard Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestDashboardEndpoint:
    """Tests for GET /api/reports/dashboard/"""

    def test_dashboard(self, manager_client, report_store, todays_sales):
        url = reverse('reports:dashboard')
        response = manager_client.get(url, {'store': str(report_store.id)})

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['today_revenue']) == Decimal('1400.00')
        assert response.data['today_customers'] == 1
        assert response.data['services_sold'] == 2
        assert response.data['active_members'] == 1

    def test_store_is_required(self, manager_client):
        url = reverse('reports:dashboard')
        response = manager_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_outsider_forbidden(self, outsider_client, report_store):
        url = reverse('reports:dashboard')
        response = outsider_client.get(url, {'store': str(report_store.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unauthenticated(self, api_client, report_store):
        url = reverse('reports:dashboard')
        response = api_client.get(url, {'store': str(report_store.id)})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Sales Report Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestSalesReportEndpoint:
    """Tests for GET /api/reports/sales/"""

    def test_default_range_covers_last_30_days(self, manager_client, report_store, todays_sales, old_sale):
        url = reverse('reports:sales')
        response = manager_client.get(url, {'store': str(report_store.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['transaction_count'] == 3
        assert Decimal(response.data['revenue']) == Decimal('2600.00')
        assert response.data['end_date'] == timezone.localdate().isoformat()

    def test_explicit_range(self, manager_client, report_store, todays_sales, old_sale):
        today = timezone.localdate()
        url = reverse('reports:sales')
        response = manager_client.get(url, {
            'store': str(report_store.id),
            'start_date': today.isoformat(),
            'end_date': today.isoformat(),
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['transaction_count'] == 2
        assert response.data['top_products'][0]['name'] == 'Argan Shampoo'
        assert response.data['top_products'][0]['count'] == 2

    def test_inverted_range(self, manager_client, report_store):
        today = timezone.localdate()
        url = reverse('reports:sales')
        response = manager_client.get(url, {
            'store': str(report_store.id),
            'start_date': today.isoformat(),
            'end_date': (today - timedelta(days=1)).isoformat(),
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_invalid_date(self, manager_client, report_store):
        url = reverse('reports:sales')
        response = manager_client.get(url, {'store': str(report_store.id), 'start_date': '2025-13-01'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_outsider_forbidden(self, outsider_client, report_store):
        url = reverse('reports:sales')
        response = outsider_client.get(url, {'store': str(report_store.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Daily Revenue Endpoint Tests
# =============================================================================

@pytest.mark.django_db
class TestDailyRevenueEndpoint:
    """Tests for GET /api/reports/daily/"""

    def test_series(self, manager_client, report_store, todays_sales, old_sale):
        url = reverse('reports:daily')
        response = manager_client.get(url, {'store': str(report_store.id)})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['data']) == 2
        last = response.data['data'][-1]
        assert last['date'] == timezone.localdate().isoformat()
        assert Decimal(last['revenue']) == Decimal('1400.00')
        assert last['transactions'] == 2

    def test_inverted_range(self, manager_client, report_store):
        today = timezone.localdate()
        url = reverse('reports:daily')
        response = manager_client.get(url, {
            'store': str(report_store.id),
            'start_date': today.isoformat(),
            'end_date': (today - timedelta(days=1)).isoformat(),
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
