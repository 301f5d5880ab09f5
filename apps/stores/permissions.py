"""
Custom permission classes for stores app.

Store-scoped access is used by catalog, customers, billing and reports
views: a user may act on a store's data when they are a super admin or are
assigned to that store.
"""
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.permissions import BasePermission, SAFE_METHODS


def requested_store_id(request, view):
    """Store id from URL kwargs, query params or request body."""
    store_id = getattr(view, 'kwargs', {}).get('store_id')
    if not store_id:
        store_id = request.query_params.get('store')
    if not store_id and hasattr(request.data, 'get'):
        store_id = request.data.get('store')
    return store_id


def _store_of(obj):
    from apps.stores.models import Store

    if isinstance(obj, Store):
        return obj
    return getattr(obj, 'store', None)


def _staff_role(user, store_id):
    from apps.stores.models import StoreStaff

    try:
        assignment = StoreStaff.objects.filter(store_id=store_id, user=user).first()
    except (DjangoValidationError, ValueError):
        return None
    return assignment.role if assignment else None


class IsStoreStaff(BasePermission):
    """
    Permission to check if user works at the requested store.

    Allows access if:
    - No store is named in the request (object-level check still applies)
    - User is a super admin
    - User is assigned to the named store

    Usage:
        class ProductViewSet(viewsets.ModelViewSet):
            permission_classes = [IsAuthenticated, IsStoreStaff]
    """

    message = 'You must be assigned to this store.'

    def has_permission(self, request, view):
        store_id = requested_store_id(request, view)
        if not store_id or request.user.is_super_admin:
            return True
        return _staff_role(request.user, store_id) is not None

    def has_object_permission(self, request, view, obj):
        store = _store_of(obj)
        if store is None or request.user.is_super_admin:
            return True
        return store.has_staff(request.user)


class IsStoreManagerOrReadOnly(BasePermission):
    """
    Staff can read store data; only managers (or super admins) may write.

    Usage:
        def get_permissions(self):
            if self.action in ['create', 'update', 'partial_update', 'destroy']:
                return [IsAuthenticated(), IsStoreStaff(), IsStoreManagerOrReadOnly()]
            return super().get_permissions()
    """

    message = 'Only store managers can modify this resource.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS or request.user.is_super_admin:
            return True
        store_id = requested_store_id(request, view)
        if not store_id:
            # Object-level check decides for detail routes
            return True
        from apps.stores.models import StaffRole
        return _staff_role(request.user, store_id) == StaffRole.STORE_MANAGER

    def has_object_permission(self, request, view, obj):
        if request.method in SAFE_METHODS:
            return True
        store = _store_of(obj)
        if store is None:
            return request.user.is_super_admin
        return store.is_manager(request.user)
