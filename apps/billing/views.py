import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import ValidationError, NotFound, PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.catalog.services import InsufficientStockError
from apps.customers.models import Customer
from apps.stores.services import get_accessible_stores, get_store, StoreNotFoundError
from .models import Transaction
from .serializers import (
    QuoteSerializer,
    CheckoutSerializer,
    TransactionQuerySerializer,
    InvoiceLookupSerializer,
    BillSerializer,
    TransactionSerializer,
    TransactionListSerializer,
)
from .services import (
    quote_bill,
    checkout,
    list_store_transactions,
    BillValidationError,
    CatalogItemNotFoundError,
    StoreAccessError,
)

logger = logging.getLogger(__name__)


class TransactionPagination(PageNumberPagination):
    """Custom pagination for transactions."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _load_bill_context(request, data):
    """Resolve store and customer of a quote/checkout request for the current user."""
    try:
        store = get_store(store_id=data['store'], user=request.user)
    except StoreNotFoundError:
        raise NotFound('Store not found.')

    customer = None
    if data.get('customer'):
        try:
            customer = Customer.objects.get(id=data['customer'])
        except (Customer.DoesNotExist, DjangoValidationError):
            raise NotFound('Customer not found.')

    return store, customer


@extend_schema(
    request=QuoteSerializer,
    responses={200: BillSerializer},
    description="Price a cart with the store's tax and loyalty rules without saving it.",
    tags=['billing'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def quote(request):
    """Preview a bill - thin HTTP handler."""
    serializer = QuoteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    store, customer = _load_bill_context(request, data)

    try:
        bill = quote_bill(
            store=store,
            items=data['items'],
            customer=customer,
            points_to_redeem=data['points_to_redeem'],
        )
    except BillValidationError as e:
        raise ValidationError({'error': str(e)})
    except CatalogItemNotFoundError as e:
        raise ValidationError({'items': str(e)})

    return Response(BillSerializer(bill).data)


class TransactionViewSet(mixins.ListModelMixin,
                         mixins.CreateModelMixin,
                         mixins.RetrieveModelMixin,
                         viewsets.GenericViewSet):
    """
    ViewSet for transactions. No update or delete: sales are immutable.

    list: Transactions of the user's stores (filters: store, customer,
        date_from, date_to, payment_method)
    create: Check out a cart
    retrieve: Transaction with items
    by_invoice: Look up by invoice number
    """

    serializer_class = TransactionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = TransactionPagination

    def get_queryset(self):
        store_ids = get_accessible_stores(user=self.request.user).values('id')

        if self.action != 'list':
            return Transaction.objects.filter(store_id__in=store_ids).prefetch_related('items')

        query_serializer = TransactionQuerySerializer(data=self.request.query_params)
        query_serializer.is_valid(raise_exception=True)
        params = query_serializer.validated_data

        if params.get('store'):
            store_ids = store_ids.filter(id=params['store'])

        return list_store_transactions(
            store_ids=store_ids,
            customer_id=params.get('customer'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
            payment_method=params.get('payment_method'),
        )

    def get_serializer_class(self):
        if self.action == 'list':
            return TransactionListSerializer
        return TransactionSerializer

    @extend_schema(request=CheckoutSerializer, responses={201: TransactionSerializer}, tags=['billing'])
    def create(self, request, *args, **kwargs):
        """Check out a cart."""
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        store, customer = _load_bill_context(request, data)

        try:
            sale = checkout(
                store=store,
                staff=request.user,
                items=data['items'],
                customer=customer,
                points_to_redeem=data['points_to_redeem'],
                payment_method=data['payment_method'],
                notes=data['notes'],
            )
        except StoreAccessError as e:
            raise PermissionDenied(str(e))
        except BillValidationError as e:
            raise ValidationError({'error': str(e)})
        except CatalogItemNotFoundError as e:
            raise ValidationError({'items': str(e)})
        except InsufficientStockError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(TransactionSerializer(sale).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: TransactionSerializer})
    @action(detail=False, methods=['get'], url_path=r'by-invoice/(?P<invoice_number>[^/]+)')
    def by_invoice(self, request, invoice_number=None):
        """
        Find a transaction by invoice number.

        Invoice numbers repeat across stores, so pass ``?store=<id>`` when
        the user works at more than one.

        GET /api/billing/transactions/by-invoice/INV-20250314-0007/
        """
        query_serializer = InvoiceLookupSerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        store_id = query_serializer.validated_data.get('store')

        queryset = self.get_queryset().filter(invoice_number=invoice_number)
        if store_id:
            queryset = queryset.filter(store_id=store_id)

        matches = list(queryset[:2])
        if not matches:
            raise NotFound(f"Invoice {invoice_number} not found.")
        if len(matches) > 1:
            raise ValidationError({'store': 'Invoice number exists in several stores, pass ?store=<id>.'})

        return Response(TransactionSerializer(matches[0]).data)
