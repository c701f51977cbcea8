"""
Role permissions for the JSON API.
Object-level ownership is decided by core.access, not here.
"""
from rest_framework import permissions

from core.constants import UserRole


class IsAdmin(permissions.BasePermission):
    """Only admins"""
    message = "User role is not authorized to access this route"

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.role == UserRole.ADMIN)


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Permission to allow Owner and Admin roles
    """
    message = "User role is not authorized to access this route"

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        return request.user.role in [UserRole.OWNER, UserRole.ADMIN]


class IsOwnerOrAdminForWrites(IsOwnerOrAdmin):
    """Any authenticated user may read; only owners and admins may write"""

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return super().has_permission(request, view)
