from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from .models import Customer
from .serializers import (
    CustomerSerializer,
    CustomerInputSerializer,
    CustomerFilterSerializer,
)
from .services import (
    create_customer,
    update_customer,
    delete_customer,
    search_customers,
    CustomerNotFoundError,
    DuplicateCustomerError,
    CustomerInUseError,
)
from apps.accounts.permissions import StaffOrModelPermissions


class CustomerPagination(PageNumberPagination):
    """Custom pagination for customers."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CustomerViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Customer CRUD operations.

    Customers are also registered implicitly the first time a booking
    is made for their phone number.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    permission_classes = [StaffOrModelPermissions]
    pagination_class = CustomerPagination

    def get_queryset(self):
        """Filter customers using input serializer validation."""
        filter_serializer = CustomerFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_customers(
            search=params.get('search'),
            customer_type=params.get('customer_type'),
        )

    def create(self, request, *args, **kwargs):
        """Register a customer."""
        serializer = CustomerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            customer = create_customer(**serializer.validated_data)
        except DuplicateCustomerError as e:
            return Response(
                {'phone': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            CustomerSerializer(customer).data,
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        """Update a customer."""
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = CustomerInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            customer = update_customer(
                customer_id=instance.id,
                data=serializer.validated_data
            )
        except DuplicateCustomerError as e:
            return Response(
                {'phone': [str(e)]},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(CustomerSerializer(customer).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a customer."""
        instance = self.get_object()

        try:
            delete_customer(customer_id=instance.id)
        except CustomerNotFoundError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_404_NOT_FOUND
            )
        except CustomerInUseError as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_409_CONFLICT
            )

        return Response(status=status.HTTP_204_NO_CONTENT)
