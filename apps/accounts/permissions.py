"""
Custom permission classes shared by the staff-facing apps.

Permission Classes:
    IsAdminOrReadOnly - Viewers may read, only admins may write

Usage:
    from apps.accounts.permissions import IsAdminOrReadOnly

    class ProductViewSet(viewsets.ModelViewSet):
        permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsAdminOrReadOnly(BasePermission):
    """
    Read access for any authenticated staff user, write access for admins.

    Viewers can browse seasons, products and registrations but any
    POST/PUT/PATCH/DELETE is rejected with 403.
    """

    message = 'Viewers have read-only access.'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return user.is_admin
