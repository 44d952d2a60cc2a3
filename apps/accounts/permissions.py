"""
Shared permission classes built on Django's model permissions.

Roles are plain ``django.contrib.auth`` groups; these classes only decide
which permission a request needs.
"""
from rest_framework.permissions import BasePermission, DjangoModelPermissions


class StaffOrModelPermissions(DjangoModelPermissions):
    """
    Permission: reads for any authenticated user, writes for staff or for
    users holding the model's add/change/delete permission.

    Usage:
        class BranchViewSet(viewsets.ModelViewSet):
            permission_classes = [StaffOrModelPermissions]
    """

    def has_permission(self, request, view):
        user = request.user
        if user and user.is_authenticated and user.is_staff:
            return True
        return super().has_permission(request, view)


class HasShopPermission(BasePermission):
    """
    Permission: user must hold ``required_permission`` (staff always pass).

    Subclass and set ``required_permission`` to an ``app_label.codename``.
    """

    required_permission = None
    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff:
            return True
        return user.has_perm(self.required_permission)
