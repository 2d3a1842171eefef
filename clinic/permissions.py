"""
Permission classes for the JSON API.
"""
from rest_framework.permissions import BasePermission

from .services.identity import lookup_is_admin


class IsAdminRole(BasePermission):
    """Allow access only to identities holding the admin role.

    The role comes from the role table, never from the token itself.
    """
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and lookup_is_admin(user))
