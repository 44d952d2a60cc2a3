from django.contrib.auth.models import Group
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAdminUser
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .serializers import (
    UserSerializer,
    UserAdminSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
    UserFilterSerializer,
    RoleSerializer,
    RoleInputSerializer,
    PermissionSerializer,
)
from .services import (
    create_user_account,
    update_user_account,
    delete_user_account,
    search_users,
    create_role,
    update_role,
    delete_role,
    list_shop_permissions,
    # Exceptions
    UserNotFoundError,
    DuplicateEmailError,
    CannotDeleteSelfError,
    RoleNotFoundError,
    DuplicateRoleError,
    UnknownPermissionError,
)
from apps.branches.services import BranchNotFoundError


@extend_schema(
    responses={200: UserSerializer},
    description="Get the authenticated user with branch, roles and permissions.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current user profile."""
    return Response(UserSerializer(request.user).data)


class AdminPagination(PageNumberPagination):
    """Custom pagination for user and role administration."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


def account_error_response(error):
    """Map user administration errors onto field errors."""
    if isinstance(error, DuplicateEmailError):
        return Response({'email': [str(error)]}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, BranchNotFoundError):
        return Response({'branch_code': [str(error)]}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, RoleNotFoundError):
        return Response({'roles': [str(error)]}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, UserNotFoundError):
        return Response({'error': str(error)}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


ACCOUNT_ERRORS = (
    DuplicateEmailError,
    BranchNotFoundError,
    RoleNotFoundError,
    UserNotFoundError,
    CannotDeleteSelfError,
)


class UserViewSet(viewsets.ModelViewSet):
    """
    Staff-only administration of shop accounts.

    list: Users, filterable by ``search``, ``branch`` code and ``role``
    create: Create a user with a branch and roles
    retrieve: Get a user
    update / partial_update: Change profile, branch, roles or password (every
        field optional for both)
    destroy: Delete a user (not yourself)
    """

    serializer_class = UserAdminSerializer
    permission_classes = [IsAdminUser]
    pagination_class = AdminPagination

    def get_queryset(self):
        if self.action != 'list':
            return search_users()

        filter_serializer = UserFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_users(
            search=params.get('search'),
            branch_code=params.get('branch'),
            role=params.get('role'),
        )

    @extend_schema(request=UserCreateSerializer, responses={201: UserAdminSerializer}, tags=['users'])
    def create(self, request, *args, **kwargs):
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = create_user_account(**serializer.validated_data)
        except ACCOUNT_ERRORS as e:
            return account_error_response(e)

        return Response(
            UserAdminSerializer(user).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=UserUpdateSerializer, responses={200: UserAdminSerializer}, tags=['users'])
    def update(self, request, *args, **kwargs):
        instance = self.get_object()

        serializer = UserUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = update_user_account(
                user_id=instance.id,
                data=serializer.validated_data
            )
        except ACCOUNT_ERRORS as e:
            return account_error_response(e)

        return Response(UserAdminSerializer(user).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()

        try:
            delete_user_account(user_id=instance.id, deleted_by=request.user)
        except ACCOUNT_ERRORS as e:
            return account_error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


class RoleViewSet(viewsets.ModelViewSet):
    """
    Staff-only administration of roles (auth groups).

    list / retrieve: Roles with their permission names
    create: Create a role with a permission list
    update / partial_update: Rename and/or sync permissions
    destroy: Delete a role
    permissions: Every permission a role can be granted
    """

    queryset = Group.objects.prefetch_related('permissions__content_type').order_by('name')
    serializer_class = RoleSerializer
    permission_classes = [IsAdminUser]
    pagination_class = AdminPagination

    @extend_schema(request=RoleInputSerializer, responses={201: RoleSerializer}, tags=['roles'])
    def create(self, request, *args, **kwargs):
        serializer = RoleInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            role = create_role(**serializer.validated_data)
        except DuplicateRoleError as e:
            return Response({'name': [str(e)]}, status=status.HTTP_400_BAD_REQUEST)
        except UnknownPermissionError as e:
            return Response({'permissions': [str(e)]}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RoleSerializer(role).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=RoleInputSerializer, responses={200: RoleSerializer}, tags=['roles'])
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = RoleInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            role = update_role(role_id=instance.id, data=serializer.validated_data)
        except DuplicateRoleError as e:
            return Response({'name': [str(e)]}, status=status.HTTP_400_BAD_REQUEST)
        except UnknownPermissionError as e:
            return Response({'permissions': [str(e)]}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RoleSerializer(role).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()

        try:
            delete_role(role_id=instance.id)
        except RoleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: PermissionSerializer(many=True)}, tags=['roles'])
    @action(detail=False, methods=['get'], url_path='permissions')
    def available_permissions(self, request):
        """List every permission a role can be granted."""
        return Response(PermissionSerializer(list_shop_permissions(), many=True).data)
