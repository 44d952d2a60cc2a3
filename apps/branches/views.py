from django.db.models import Q
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from .models import Branch
from .serializers import BranchSerializer, BranchInputSerializer
from .services import (
    create_branch,
    update_branch,
    delete_branch,
    BranchNotFoundError,
    DuplicateBranchCodeError,
    BranchInUseError,
)
from apps.accounts.permissions import StaffOrModelPermissions


class BranchPagination(PageNumberPagination):
    """Custom pagination for branches."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class BranchViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Branch CRUD operations.

    list: Get all branches
    create: Create a new branch
    retrieve: Get a specific branch
    update: Update a branch
    partial_update: Partially update a branch
    destroy: Delete a branch without bookings
    """

    queryset = Branch.objects.all()
    serializer_class = BranchSerializer
    permission_classes = [StaffOrModelPermissions]
    pagination_class = BranchPagination

    def get_queryset(self):
        """Filter branches by ``search`` on name or code."""
        queryset = super().get_queryset()
        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(code__icontains=search)
            )
        return queryset

    def create(self, request, *args, **kwargs):
        """Create a new branch."""
        serializer = BranchInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            branch = create_branch(**serializer.validated_data)
        except DuplicateBranchCodeError as e:
            return Response(
                {'code': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            BranchSerializer(branch).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        """Update a branch (PUT requires all fields, PATCH any subset)."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = BranchInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            branch = update_branch(
                branch_id=instance.id,
                data=serializer.validated_data
            )
        except DuplicateBranchCodeError as e:
            return Response(
                {'code': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(BranchSerializer(branch).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a branch."""
        instance = self.get_object()

        try:
            delete_branch(branch_id=instance.id)
        except BranchNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except BranchInUseError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )

        return Response(status=status.HTTP_204_NO_CONTENT)
