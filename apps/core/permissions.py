"""
Permission classes for hierarchy-based access control.
"""

from rest_framework import permissions

from .models import Location, Station


class HasHierarchyAccess(permissions.BasePermission):
    """
    Permission class to ensure users only reach entities inside their own
    branch of the franchise hierarchy.
    """

    def has_permission(self, request, view):
        user = request.user
        if not user.is_authenticated:
            return False
        return user.is_platform_admin() or user.franchisor_id is not None

    def has_object_permission(self, request, view, obj):
        if isinstance(obj, Station):
            return request.user.can_access_station(obj)
        if isinstance(obj, Location):
            return request.user.can_access_location(obj)
        return True
