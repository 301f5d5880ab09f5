from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.stores.permissions import IsStoreStaff, IsStoreManagerOrReadOnly
from apps.stores.services import get_accessible_stores
from .models import ServiceCategory, ProductCategory, Service, Product
from .serializers import (
    ServiceCategorySerializer,
    ProductCategorySerializer,
    ServiceSerializer,
    ProductSerializer,
    RestockSerializer,
)
from .services import (
    get_product_by_barcode,
    get_low_stock_products,
    restock_product,
    ProductNotFoundError,
    InvalidQuantityError,
)


class CatalogPagination(PageNumberPagination):
    """Custom pagination for catalog lists."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class StoreScopedViewSet(viewsets.ModelViewSet):
    """
    Base ViewSet for rows that belong to a store.

    Results are limited to the user's accessible stores and can be narrowed
    with ``?store=<id>``. Staff read, managers write.
    """

    permission_classes = [IsAuthenticated, IsStoreStaff, IsStoreManagerOrReadOnly]
    pagination_class = CatalogPagination
    model = None

    def get_queryset(self):
        queryset = self.model.objects.filter(
            store__in=get_accessible_stores(user=self.request.user)
        ).select_related('store')

        store_id = self.request.query_params.get('store')
        if store_id:
            queryset = queryset.filter(store_id=store_id)

        return queryset


class ServiceCategoryViewSet(StoreScopedViewSet):
    """CRUD for service categories."""

    model = ServiceCategory
    serializer_class = ServiceCategorySerializer


class ProductCategoryViewSet(StoreScopedViewSet):
    """CRUD for product categories."""

    model = ProductCategory
    serializer_class = ProductCategorySerializer


class ServiceViewSet(StoreScopedViewSet):
    """
    ViewSet for salon services.

    list: Active services (filters: store, category, search)
    destroy: Deactivate a service
    """

    model = Service
    serializer_class = ServiceSerializer

    def get_queryset(self):
        queryset = super().get_queryset().filter(is_active=True).select_related('category')

        category_id = self.request.query_params.get('category')
        if category_id:
            queryset = queryset.filter(category_id=category_id)

        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(name__icontains=search)

        return queryset

    def perform_destroy(self, instance):
        """Soft delete, past transactions keep their snapshot."""
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])


class ProductViewSet(StoreScopedViewSet):
    """
    ViewSet for retail products.

    list: Active products (filters: store, category, brand, search)
    scan: Look up a product by barcode
    low_stock: Products at or below minimum stock
    restock: Add received units
    """

    model = Product
    serializer_class = ProductSerializer

    def get_queryset(self):
        queryset = super().get_queryset().filter(is_active=True).select_related('category')

        category_id = self.request.query_params.get('category')
        if category_id:
            queryset = queryset.filter(category_id=category_id)

        brand = self.request.query_params.get('brand')
        if brand:
            queryset = queryset.filter(brand__iexact=brand)

        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(name__icontains=search)

        return queryset

    def perform_destroy(self, instance):
        """Soft delete, past transactions keep their snapshot."""
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])

    @extend_schema(responses={200: ProductSerializer})
    @action(detail=False, methods=['get'], url_path=r'scan/(?P<barcode>[^/]+)')
    def scan(self, request, barcode=None):
        """
        Look up a product by barcode.

        GET /api/catalog/products/scan/{barcode}/
        """
        try:
            product = get_product_by_barcode(barcode=barcode)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        # Found but in a store the user cannot see
        if not self.get_queryset().filter(id=product.id).exists():
            return Response({'error': f"No product with barcode {barcode}"}, status=status.HTTP_404_NOT_FOUND)

        return Response(ProductSerializer(product).data)

    @extend_schema(
        parameters=[OpenApiParameter('store', str, required=True)],
        responses={200: ProductSerializer(many=True)},
    )
    @action(detail=False, methods=['get'], url_path='low-stock')
    def low_stock(self, request):
        """
        Products at or below their minimum stock.

        GET /api/catalog/products/low-stock/?store={id}
        """
        store_id = request.query_params.get('store')
        if not store_id:
            raise ValidationError({'store': 'This query parameter is required.'})

        products = get_low_stock_products(store_id=store_id).filter(
            id__in=self.get_queryset().values('id')
        )
        return Response(ProductSerializer(products, many=True).data)

    @extend_schema(request=RestockSerializer, responses={200: ProductSerializer})
    @action(detail=True, methods=['post'])
    def restock(self, request, pk=None):
        """
        Add received units to stock (managers only).

        POST /api/catalog/products/{id}/restock/  Body: {"quantity": 12}
        """
        product = self.get_object()
        serializer = RestockSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            product = restock_product(
                product_id=product.id,
                quantity=serializer.validated_data['quantity'],
            )
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidQuantityError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data)
