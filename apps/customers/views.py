from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.stores.permissions import IsStoreStaff, IsStoreManagerOrReadOnly
from apps.stores.models import StaffRole
from apps.stores.services import get_accessible_stores
from .models import Customer, MembershipPlan
from .serializers import (
    CustomerSerializer,
    CustomerCreateSerializer,
    CustomerSearchSerializer,
    CustomerMembershipSerializer,
    MembershipPlanSerializer,
    EnrollSerializer,
    PointsAdjustmentSerializer,
    LoyaltyLedgerEntrySerializer,
)
from .services import (
    create_customer,
    search_customers,
    enroll_customer,
    adjust_points,
    DuplicateCustomerError,
    InsufficientPointsError,
    PlanNotAvailableError,
)


class CustomerPagination(PageNumberPagination):
    """Custom pagination for customers."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CustomerViewSet(mixins.ListModelMixin,
                      mixins.CreateModelMixin,
                      mixins.RetrieveModelMixin,
                      mixins.UpdateModelMixin,
                      viewsets.GenericViewSet):
    """
    ViewSet for customers (shared across stores).

    list: All customers (optional ``search``)
    create: Register a customer
    retrieve: Customer profile
    partial_update: Edit contact details
    search: Counter lookup by name, mobile or email
    memberships: Enrolment history
    loyalty: Ledger (GET) or manual correction (POST, managers)
    enroll: Enrol in a membership plan
    """

    serializer_class = CustomerSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = CustomerPagination

    def get_queryset(self):
        return search_customers(query=self.request.query_params.get('search'))

    def create(self, request, *args, **kwargs):
        serializer = CustomerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            customer = create_customer(**serializer.validated_data)
        except DuplicateCustomerError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[OpenApiParameter('q', str, required=True)],
        responses={200: CustomerSerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def search(self, request):
        """
        Quick lookup for the billing screen (first 20 matches).

        GET /api/customers/search/?q=98450
        """
        query_serializer = CustomerSearchSerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        customers = search_customers(query=query_serializer.validated_data['q'])[:20]
        return Response(CustomerSerializer(customers, many=True).data)

    @extend_schema(responses={200: CustomerMembershipSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def memberships(self, request, pk=None):
        """Enrolment history, newest first."""
        customer = self.get_object()
        memberships = customer.memberships.select_related('plan')
        return Response(CustomerMembershipSerializer(memberships, many=True).data)

    @extend_schema(request=PointsAdjustmentSerializer, responses={200: LoyaltyLedgerEntrySerializer(many=True)})
    @action(detail=True, methods=['get', 'post'])
    def loyalty(self, request, pk=None):
        """
        Loyalty ledger, or a manual points correction.

        GET  /api/customers/{id}/loyalty/
        POST /api/customers/{id}/loyalty/  Body: {"points": -20, "note": "..."}
        """
        customer = self.get_object()

        if request.method == 'POST':
            if not (request.user.is_super_admin or request.user.store_assignments.filter(
                    role=StaffRole.STORE_MANAGER).exists()):
                return Response(
                    {'error': 'Only store managers can adjust loyalty points.'},
                    status=status.HTTP_403_FORBIDDEN
                )

            serializer = PointsAdjustmentSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            try:
                customer = adjust_points(
                    customer_id=customer.id,
                    points=serializer.validated_data['points'],
                    note=serializer.validated_data['note'],
                    adjusted_by=request.user,
                )
            except InsufficientPointsError as e:
                return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        entries = customer.loyalty_entries.select_related('transaction')[:100]
        return Response({
            'loyalty_points': customer.loyalty_points,
            'entries': LoyaltyLedgerEntrySerializer(entries, many=True).data,
        })

    @extend_schema(request=EnrollSerializer, responses={201: CustomerMembershipSerializer})
    @action(detail=True, methods=['post'])
    def enroll(self, request, pk=None):
        """
        Enrol the customer in a plan of a store the user works at.

        POST /api/customers/{id}/enroll/  Body: {"plan_id": "...", "start_date": "2025-01-01"}
        """
        customer = self.get_object()
        serializer = EnrollSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        plan_id = serializer.validated_data['plan_id']
        accessible = get_accessible_stores(user=request.user)
        if not MembershipPlan.objects.filter(id=plan_id, store__in=accessible).exists():
            return Response({'error': 'Membership plan not found.'}, status=status.HTTP_404_NOT_FOUND)

        try:
            membership = enroll_customer(
                customer_id=customer.id,
                plan_id=plan_id,
                start_date=serializer.validated_data['start_date'],
            )
        except PlanNotAvailableError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CustomerMembershipSerializer(membership).data, status=status.HTTP_201_CREATED)


class MembershipPlanViewSet(viewsets.ModelViewSet):
    """
    ViewSet for a store's membership plans.

    Staff see plans of their stores (``?store=<id>`` to narrow); managers
    create and edit them. Deleting a plan retires it.
    """

    serializer_class = MembershipPlanSerializer
    permission_classes = [IsAuthenticated, IsStoreStaff, IsStoreManagerOrReadOnly]
    pagination_class = CustomerPagination

    def get_queryset(self):
        queryset = MembershipPlan.objects.filter(
            store__in=get_accessible_stores(user=self.request.user)
        )

        store_id = self.request.query_params.get('store')
        if store_id:
            queryset = queryset.filter(store_id=store_id)

        if self.action == 'list' and self.request.query_params.get('include_inactive') != 'true':
            queryset = queryset.filter(is_active=True)

        return queryset

    def perform_destroy(self, instance):
        """Retire the plan; existing enrolments keep running."""
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])
