from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsSuperAdmin
from .models import Store
from .serializers import (
    StoreSerializer,
    StoreListSerializer,
    StoreStaffSerializer,
    LoyaltySettingsSerializer,
    TaxConfigSerializer,
    AssignStaffSerializer,
    RemoveStaffSerializer,
)
from .permissions import IsStoreStaff
from .services import (
    get_accessible_stores,
    update_tax_config,
    update_loyalty_settings,
    assign_staff,
    remove_staff,
    get_store_staff,
    # Exceptions
    StaffUserNotFoundError,
    AlreadyAssignedError,
    NotAssignedError,
    InsufficientPermissionsError,
)


class StorePagination(PageNumberPagination):
    """Custom pagination for stores."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class StoreViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Store operations.

    list: Stores the user works at (all stores for super admins)
    create: Create a store (super admin only)
    retrieve: Get a specific store
    update: Update a store (super admin only)
    destroy: Deactivate a store (super admin only)
    """

    serializer_class = StoreSerializer
    permission_classes = [IsAuthenticated, IsStoreStaff]
    pagination_class = StorePagination

    def get_queryset(self):
        """Return only stores the user can access."""
        return get_accessible_stores(user=self.request.user).prefetch_related('staff')

    def get_serializer_class(self):
        if self.action == 'list':
            return StoreListSerializer
        return StoreSerializer

    def get_permissions(self):
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [IsAuthenticated(), IsSuperAdmin()]
        return super().get_permissions()

    def perform_destroy(self, instance):
        """Stores are deactivated, never deleted (transactions reference them)."""
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])

    @extend_schema(responses={200: StoreStaffSerializer(many=True)})
    @action(detail=True, methods=['get'])
    def staff(self, request, pk=None):
        """List staff assigned to the store."""
        store = self.get_object()
        serializer = StoreStaffSerializer(get_store_staff(store_id=store.id), many=True)
        return Response(serializer.data)

    @extend_schema(request=AssignStaffSerializer, responses={201: StoreStaffSerializer})
    @action(detail=True, methods=['post'], url_path='staff/assign')
    def assign_staff(self, request, pk=None):
        """Assign a user to the store (manager only)."""
        store = self.get_object()
        serializer = AssignStaffSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            assignment = assign_staff(
                store_id=store.id,
                user_id=serializer.validated_data['user_id'],
                role=serializer.validated_data['role'],
                assigned_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except StaffUserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AlreadyAssignedError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(StoreStaffSerializer(assignment).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=RemoveStaffSerializer, responses={204: None})
    @action(detail=True, methods=['post'], url_path='staff/remove')
    def remove_staff(self, request, pk=None):
        """Remove a user from the store (manager only)."""
        store = self.get_object()
        serializer = RemoveStaffSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_staff(
                store_id=store.id,
                user_id=serializer.validated_data['user_id'],
                removed_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except NotAssignedError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=TaxConfigSerializer, responses={200: TaxConfigSerializer})
    @action(detail=True, methods=['get', 'put'])
    def tax(self, request, pk=None):
        """
        Get or replace the store's tax configuration.

        GET /api/stores/{id}/tax/
        PUT /api/stores/{id}/tax/  Body: {"enabled": true, "rate": "18.00"}
        """
        store = self.get_object()

        if request.method == 'GET':
            return Response({'enabled': store.tax_enabled, 'rate': f'{store.tax_rate:.2f}'})

        serializer = TaxConfigSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store = update_tax_config(
                store_id=store.id,
                user=request.user,
                enabled=serializer.validated_data['enabled'],
                rate=serializer.validated_data['rate'],
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response({'enabled': store.tax_enabled, 'rate': f'{store.tax_rate:.2f}'})

    @extend_schema(request=LoyaltySettingsSerializer, responses={200: LoyaltySettingsSerializer})
    @action(detail=True, methods=['get', 'patch'])
    def loyalty(self, request, pk=None):
        """
        Get or update the store's loyalty settings.

        GET   /api/stores/{id}/loyalty/
        PATCH /api/stores/{id}/loyalty/
        """
        store = self.get_object()

        if request.method == 'GET':
            rules = store.get_loyalty_rules()
            return Response({
                'points_per_currency_unit': str(rules.base_points_rate),
                'currency_per_point': str(rules.currency_per_point),
                'min_redemption_points': rules.min_redemption_points,
                'max_redemption_percentage': (
                    str(rules.max_redemption_percentage)
                    if rules.max_redemption_percentage is not None else None
                ),
            })

        serializer = LoyaltySettingsSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            settings_obj = update_loyalty_settings(
                store_id=store.id,
                user=request.user,
                **serializer.validated_data
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(LoyaltySettingsSerializer(settings_obj).data)
