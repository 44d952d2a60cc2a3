from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from .models import Item, Problem
from .serializers import (
    ItemSerializer,
    ItemInputSerializer,
    ItemFilterSerializer,
    ProblemSerializer,
    ProblemInputSerializer,
)
from .services import (
    create_item,
    update_item,
    delete_item,
    search_items,
    create_problem,
    update_problem,
    delete_problem,
    ItemNotFoundError,
    DuplicateItemCodeError,
    ItemInUseError,
    ProblemNotFoundError,
    DuplicateProblemError,
)
from apps.accounts.permissions import StaffOrModelPermissions


class CatalogPagination(PageNumberPagination):
    """Custom pagination for the catalog."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Item CRUD operations.

    list: Get all items (filter by search/status)
    create: Create a new item
    retrieve: Get a specific item
    update: Update an item
    partial_update: Partially update an item
    destroy: Delete an item that was never booked
    """

    queryset = Item.objects.all()
    serializer_class = ItemSerializer
    permission_classes = [StaffOrModelPermissions]
    pagination_class = CatalogPagination

    def get_queryset(self):
        """Filter items using input serializer validation."""
        filter_serializer = ItemFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_items(
            search=params.get('search'),
            status=params.get('status'),
        )

    def create(self, request, *args, **kwargs):
        """Create a new item."""
        serializer = ItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = create_item(**serializer.validated_data)
        except DuplicateItemCodeError as e:
            return Response(
                {'code': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            ItemSerializer(item).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        """Update an item."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = ItemInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_item(item_id=instance.id, data=serializer.validated_data)
        except DuplicateItemCodeError as e:
            return Response(
                {'code': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(ItemSerializer(item).data)

    def destroy(self, request, *args, **kwargs):
        """Delete an item."""
        instance = self.get_object()

        try:
            delete_item(item_id=instance.id)
        except ItemNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except ItemInUseError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )

        return Response(status=status.HTTP_204_NO_CONTENT)


class ProblemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Problem labels.

    Labels offered on the booking form as issues found on the garments.
    """

    queryset = Problem.objects.all()
    serializer_class = ProblemSerializer
    permission_classes = [StaffOrModelPermissions]
    pagination_class = CatalogPagination

    def create(self, request, *args, **kwargs):
        serializer = ProblemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            problem = create_problem(name=serializer.validated_data['name'])
        except DuplicateProblemError as e:
            return Response(
                {'name': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            ProblemSerializer(problem).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = ProblemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            problem = update_problem(
                problem_id=instance.id,
                name=serializer.validated_data['name']
            )
        except DuplicateProblemError as e:
            return Response(
                {'name': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(ProblemSerializer(problem).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()

        try:
            delete_problem(problem_id=instance.id)
        except ProblemNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )

        return Response(status=status.HTTP_204_NO_CONTENT)
