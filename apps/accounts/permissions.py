"""Role-based permission classes shared across apps."""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsSuperAdmin(BasePermission):
    """Allows access only to super admins."""

    message = 'Only super admins can perform this action.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_super_admin)


class IsSuperAdminOrReadOnly(IsSuperAdmin):
    """Read access for any authenticated user, writes for super admins."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
