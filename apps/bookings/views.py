from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .models import Booking
from .serializers import (
    BookingSerializer,
    BookingListSerializer,
    BookingCreateSerializer,
    BookingQuoteInputSerializer,
    BookingQuoteSerializer,
    BookingFormSerializer,
    BookingFilterSerializer,
    BookingStatusUpdateSerializer,
    StatisticsFilterSerializer,
)
from .services import (
    get_booking_form_context,
    quote_booking,
    create_booking,
    get_booking_by_id,
    update_booking_status,
    filter_bookings,
    get_booking_statistics,
    BookingValidationError,
    BookingNotFoundError,
    InvalidStatusTransitionError,
    ReceiptAllocationError,
    ConfigurationMissingError,
)
from .permissions import (
    CanAccessPos,
    CanUpdateBookingStatus,
    CanViewReports,
    IsSameBranchOrStaff,
)


class BookingPagination(PageNumberPagination):
    """Custom pagination for bookings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def booking_error_response(error):
    """Translate a bookings service exception into an API response."""
    if isinstance(error, BookingValidationError):
        return Response(error.errors, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, ConfigurationMissingError):
        return Response({'error': str(error)}, status=status.HTTP_409_CONFLICT)
    if isinstance(error, BookingNotFoundError):
        return Response({'error': str(error)}, status=status.HTTP_404_NOT_FOUND)
    if isinstance(error, InvalidStatusTransitionError):
        return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(error, ReceiptAllocationError):
        return Response({'error': str(error)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    raise error


BOOKING_ERRORS = (
    BookingValidationError,
    ConfigurationMissingError,
    BookingNotFoundError,
    InvalidStatusTransitionError,
    ReceiptAllocationError,
)


class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for bookings.

    list: Bookings (filter by status/delivery type/branch/customer/dates)
    create: Take a booking at the point of sale
    retrieve: A booking with its lines
    form: Booking form context (dates, items, problems, configuration)
    quote: Price a booking without saving it
    status: Move a booking to its next status
    statistics: Booking totals for reports
    """

    queryset = Booking.objects.select_related('customer', 'branch', 'created_by')
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated, IsSameBranchOrStaff]
    pagination_class = BookingPagination

    def get_permissions(self):
        """Use different permissions for different actions."""
        if self.action in ['create', 'form', 'quote']:
            return [IsAuthenticated(), CanAccessPos()]
        elif self.action == 'update_status':
            return [IsAuthenticated(), CanUpdateBookingStatus(), IsSameBranchOrStaff()]
        elif self.action == 'statistics':
            return [IsAuthenticated(), CanViewReports()]
        return super().get_permissions()

    def get_queryset(self):
        """Filter bookings using input serializer validation."""
        queryset = super().get_queryset()
        user = self.request.user

        if self.action != 'list':
            return queryset.prefetch_related('booking_items__item')

        filter_serializer = BookingFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        branch_id = params.get('branch')
        if not user.is_staff:
            # Staff see every branch; everyone else only their own
            if user.branch_id is None:
                return queryset.none()
            branch_id = user.branch_id

        return filter_bookings(
            queryset=queryset,
            status=params.get('status'),
            delivery_type=params.get('delivery_type'),
            branch_id=branch_id,
            customer=params.get('customer'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return BookingListSerializer
        elif self.action == 'create':
            return BookingCreateSerializer
        return BookingSerializer

    @extend_schema(
        request=BookingCreateSerializer,
        responses={201: BookingSerializer},
        tags=['bookings'],
    )
    def create(self, request, *args, **kwargs):
        """
        Take a booking.

        POST /api/bookings/
        Body: {"customer_id": "03001234567", "selected_items": [{"id": 1, "units": 2}],
               "delivery_type": "urgent", "hanger_units": 1, "notes": "", "issues": []}
        """
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            booking = create_booking(
                customer_phone=data['customer_id'],
                selected_items=data['selected_items'],
                delivery_type=data['delivery_type'],
                hanger_units=data['hanger_units'],
                notes=data['notes'],
                issues=data['issues'],
                branch=request.user.branch,
                created_by=request.user,
            )
        except BOOKING_ERRORS as e:
            return booking_error_response(e)

        booking = get_booking_by_id(booking_id=booking.id)
        return Response(
            BookingSerializer(booking).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses=BookingFormSerializer, tags=['bookings'])
    @action(detail=False, methods=['get'])
    def form(self, request):
        """
        Dates, items, problems and configuration for the booking form.

        GET /api/bookings/form/
        """
        try:
            context = get_booking_form_context()
        except ConfigurationMissingError as e:
            return booking_error_response(e)

        return Response(BookingFormSerializer(context).data)

    @extend_schema(
        request=BookingQuoteInputSerializer,
        responses=BookingQuoteSerializer,
        tags=['bookings'],
    )
    @action(detail=False, methods=['post'])
    def quote(self, request):
        """
        Price a booking without saving it.

        POST /api/bookings/quote/
        Body: {"selected_items": [{"id": 1, "units": 2}], "delivery_type": "normal",
               "hanger_units": 0}
        """
        serializer = BookingQuoteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            quote = quote_booking(
                selected_items=data['selected_items'],
                delivery_type=data['delivery_type'],
                hanger_units=data['hanger_units'],
            )
        except BOOKING_ERRORS as e:
            return booking_error_response(e)

        return Response(BookingQuoteSerializer(quote).data)

    @extend_schema(
        request=BookingStatusUpdateSerializer,
        responses=BookingSerializer,
        tags=['bookings'],
    )
    @action(detail=True, methods=['post'], url_path='status')
    def update_status(self, request, pk=None):
        """
        Move a booking to a new status.

        POST /api/bookings/{id}/status/
        Body: {"status": "processing"}
        """
        booking = self.get_object()

        serializer = BookingStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            update_booking_status(
                booking_id=booking.id,
                status=serializer.validated_data['status'],
                updated_by=request.user,
            )
        except BOOKING_ERRORS as e:
            return booking_error_response(e)

        booking = get_booking_by_id(booking_id=booking.id)
        return Response(BookingSerializer(booking).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('branch', int, description='Branch id (staff only)'),
            OpenApiParameter('date_from', str, description='YYYY-MM-DD'),
            OpenApiParameter('date_to', str, description='YYYY-MM-DD'),
        ],
        tags=['bookings'],
    )
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """
        Booking totals and breakdowns.

        GET /api/bookings/statistics/?branch=1&date_from=2024-01-01
        """
        filter_serializer = StatisticsFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        branch_id = params.get('branch')
        if not request.user.is_staff:
            branch_id = request.user.branch_id
            if branch_id is None:
                return Response(
                    {'error': 'You must be assigned to a branch to view reports.'},
                    status=status.HTTP_403_FORBIDDEN
                )

        stats = get_booking_statistics(
            branch_id=branch_id,
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )
        return Response(stats)
