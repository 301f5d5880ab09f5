import pytest
from django.urls import reverse
from rest_framework import status
from apps.catalog.models import Service, Product


# =============================================================================
# Service Tests
# =============================================================================

@pytest.mark.django_db
class TestServiceEndpoints:
    """Tests for /api/catalog/services/"""

    def test_list_services(self, cashier_client, haircut):
        url = reverse('catalog:service-list')
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'][0]['name'] == 'Haircut'
        assert response.data['results'][0]['category_name'] == 'Hair'

    def test_list_unauthenticated(self, api_client):
        url = reverse('catalog:service-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_manager_creates_service(self, manager_client, catalog_store):
        url = reverse('catalog:service-list')
        response = manager_client.post(url, {
            'store': str(catalog_store.id),
            'name': 'Facial',
            'price': '1200.00',
            'duration_minutes': 60,
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert Service.objects.filter(name='Facial', store=catalog_store).exists()

    def test_cashier_cannot_create_service(self, cashier_client, catalog_store):
        url = reverse('catalog:service-list')
        response = cashier_client.post(url, {
            'store': str(catalog_store.id),
            'name': 'Facial',
            'price': '1200.00',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_negative_price_rejected(self, manager_client, catalog_store):
        url = reverse('catalog:service-list')
        response = manager_client.post(url, {
            'store': str(catalog_store.id),
            'name': 'Free Money',
            'price': '-10.00',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_cannot_create_in_foreign_store(self, manager_client, foreign_store):
        url = reverse('catalog:service-list')
        response = manager_client.post(url, {
            'store': str(foreign_store.id),
            'name': 'Facial',
            'price': '1200.00',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_deactivates(self, manager_client, haircut):
        url = reverse('catalog:service-detail', kwargs={'pk': haircut.id})
        response = manager_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        haircut.refresh_from_db()
        assert haircut.is_active is False


# =============================================================================
# Product Tests
# =============================================================================

@pytest.mark.django_db
class TestProductEndpoints:
    """Tests for /api/catalog/products/"""

    def test_list_hides_foreign_products(self, cashier_client, shampoo, foreign_product):
        url = reverse('catalog:product-list')
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        names = [p['name'] for p in response.data['results']]
        assert 'Argan Shampoo' in names
        assert 'Foreign Wax' not in names

    def test_scan_barcode(self, cashier_client, shampoo):
        url = reverse('catalog:product-scan', kwargs={'barcode': shampoo.barcode})
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(shampoo.id)

    def test_scan_unknown_barcode(self, cashier_client, catalog_store):
        url = reverse('catalog:product-scan', kwargs={'barcode': '404'})
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_scan_foreign_barcode(self, cashier_client, foreign_product):
        url = reverse('catalog:product-scan', kwargs={'barcode': foreign_product.barcode})
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_low_stock(self, cashier_client, catalog_store, shampoo, serum):
        url = reverse('catalog:product-low-stock')
        response = cashier_client.get(url, {'store': str(catalog_store.id)})

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Hair Serum']
        assert response.data[0]['is_low_stock'] is True

    def test_low_stock_requires_store(self, cashier_client, catalog_store):
        url = reverse('catalog:product-low-stock')
        response = cashier_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_manager_restocks(self, manager_client, serum):
        url = reverse('catalog:product-restock', kwargs={'pk': serum.id})
        response = manager_client.post(url, {'quantity': 8})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['stock'] == 10

    def test_cashier_cannot_restock(self, cashier_client, serum):
        url = reverse('catalog:product-restock', kwargs={'pk': serum.id})
        response = cashier_client.post(url, {'quantity': 8})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_duplicate_barcode_rejected(self, manager_client, catalog_store, shampoo):
        url = reverse('catalog:product-list')
        response = manager_client.post(url, {
            'store': str(catalog_store.id),
            'name': 'Copycat',
            'price': '10.00',
            'barcode': shampoo.barcode,
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_blank_barcodes_do_not_collide(self, manager_client, catalog_store):
        url = reverse('catalog:product-list')
        for name in ['Comb', 'Brush']:
            response = manager_client.post(url, {
                'store': str(catalog_store.id),
                'name': name,
                'price': '50.00',
                'barcode': '',
            })
            assert response.status_code == status.HTTP_201_CREATED

        assert Product.objects.filter(barcode__isnull=True).count() == 2


@pytest.mark.django_db
class TestCategoryEndpoints:

    def test_duplicate_category_name_rejected(self, manager_client, catalog_store, hair_category):
        url = reverse('catalog:service-category-list')
        response = manager_client.post(url, {'store': str(catalog_store.id), 'name': 'Hair'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
