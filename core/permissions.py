"""
Custom permission classes for role and email-verification gating.

DRF evaluates permission classes in order, so views list
``IsAuthenticated`` first, then ``IsAdminRole`` where needed and finally
``IsEmailVerified``; a missing token is a 401, the wrong role or an
unverified address a 403.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsEmailVerified(BasePermission):
    """Allow access only to users who confirmed their email address."""
    message = 'Please verify your email address before accessing this resource.'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "is_email_verified", False))


class IsAdminRole(BasePermission):
    """Allow access only to users with the administrative role."""
    message = 'Access denied. Admin privileges required.'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated and getattr(user, "role", None) == "admin")


class IsAdminOrReadOnly(BasePermission):
    """Reads are public; writes need a verified administrator."""
    message = IsAdminRole.message

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if request.method in SAFE_METHODS:
            return True
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if getattr(user, "role", None) != "admin":
            return False
        if not getattr(user, "is_email_verified", False):
            self.message = IsEmailVerified.message
            return False
        return True
