from rest_framework.permissions import BasePermission

from apps.accounts.permissions import HasShopPermission


class CanAccessPos(HasShopPermission):
    """Permission: user may take bookings at the point of sale."""

    required_permission = 'bookings.access_pos'


class CanUpdateBookingStatus(HasShopPermission):
    """Permission: user may move bookings through their statuses."""

    required_permission = 'bookings.update_booking_status'


class CanViewReports(HasShopPermission):
    """Permission: user may see booking statistics."""

    required_permission = 'bookings.view_reports'


class IsSameBranchOrStaff(BasePermission):
    """
    Object-level permission: non-staff users only reach bookings of their
    own branch.
    """

    def has_object_permission(self, request, view, obj):
        if request.user.is_staff:
            return True
        return obj.branch_id is not None and obj.branch_id == request.user.branch_id
