from rest_framework import serializers
from .models import Booking, BookingItem, BookingStatus, DeliveryType
from apps.catalog.serializers import ItemSerializer, ProblemSerializer
from apps.configuration.serializers import PricingConfigurationSerializer

# Upper bound for a single line quantity or hanger count
MAX_UNITS = 9999


# =============================================================================
# Input Serializers
# =============================================================================

class SelectedItemSerializer(serializers.Serializer):
    """One line of a booking request."""

    id = serializers.IntegerField(min_value=1)
    units = serializers.IntegerField(min_value=1, max_value=MAX_UNITS)


class BookingQuoteInputSerializer(serializers.Serializer):
    """Validate a quote preview request."""

    selected_items = SelectedItemSerializer(many=True, allow_empty=False)
    delivery_type = serializers.ChoiceField(choices=DeliveryType.choices)
    hanger_units = serializers.IntegerField(
        min_value=0, max_value=MAX_UNITS, required=False, default=0
    )


class BookingCreateSerializer(BookingQuoteInputSerializer):
    """
    Validate a booking submission.

    ``customer_id`` is the customer's phone number; unknown numbers are
    registered on the fly.
    """

    customer_id = serializers.CharField(max_length=20)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    issues = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False,
        default=list
    )


class BookingFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for booking listing.

    Query Parameters:
        status (str): Booking status
        delivery_type (str): Delivery type
        branch (int): Branch id (staff only; others see their own branch)
        customer (str): Match against customer phone
        date_from (date): First booking day, inclusive
        date_to (date): Last booking day, inclusive
    """

    status = serializers.ChoiceField(choices=BookingStatus.choices, required=False)
    delivery_type = serializers.ChoiceField(choices=DeliveryType.choices, required=False)
    branch = serializers.IntegerField(min_value=1, required=False)
    customer = serializers.CharField(max_length=20, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'date_to must be on or after date_from.'
            })
        return attrs


class StatisticsFilterSerializer(serializers.Serializer):
    """Validate query parameters for booking statistics."""

    branch = serializers.IntegerField(min_value=1, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({
                'date_to': 'date_to must be on or after date_from.'
            })
        return attrs


class BookingStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.choices)


# =============================================================================
# Output Serializers
# =============================================================================

class BookingItemSerializer(serializers.ModelSerializer):
    """Booked line with the price captured at booking time."""

    item_code = serializers.CharField(source='item.code', read_only=True)
    item_name = serializers.CharField(source='item.name', read_only=True)

    class Meta:
        model = BookingItem
        fields = ['id', 'item', 'item_code', 'item_name', 'units', 'unit_price', 'line_total']
        read_only_fields = fields


class BookingListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for booking lists."""

    branch_code = serializers.CharField(source='branch.code', read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id',
            'receipt_number',
            'customer_phone',
            'branch',
            'branch_code',
            'delivery_type',
            'status',
            'total_amount',
            'number_of_pieces',
            'booking_date',
            'delivery_date',
        ]
        read_only_fields = fields


class BookingSerializer(serializers.ModelSerializer):
    """Full booking with its lines."""

    branch_code = serializers.CharField(source='branch.code', read_only=True)
    customer_type = serializers.CharField(source='customer.customer_type', read_only=True)
    created_by_name = serializers.SerializerMethodField()
    items = BookingItemSerializer(source='booking_items', many=True, read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id',
            'receipt_number',
            'customer',
            'customer_phone',
            'customer_type',
            'branch',
            'branch_code',
            'created_by',
            'created_by_name',
            'delivery_type',
            'status',
            'subtotal_amount',
            'surcharge_percentage',
            'surcharge_amount',
            'amount_total',
            'sales_tax_percentage',
            'sales_tax_amount',
            'hanger_units',
            'hanger_amount',
            'total_amount',
            'number_of_pieces',
            'number_of_units',
            'booking_date',
            'delivery_date',
            'notes',
            'issues',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_created_by_name(self, obj):
        if obj.created_by is None:
            return None
        return obj.created_by.get_display_name()


class QuoteLineSerializer(serializers.Serializer):
    item = serializers.IntegerField(source='item.id')
    item_code = serializers.CharField(source='item.code')
    item_name = serializers.CharField(source='item.name')
    units = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    line_total = serializers.DecimalField(max_digits=10, decimal_places=2)


class BookingQuoteSerializer(serializers.Serializer):
    """Priced booking preview; nothing is saved."""

    subtotal_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    surcharge_percentage = serializers.DecimalField(max_digits=8, decimal_places=2)
    surcharge_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    amount_total = serializers.DecimalField(max_digits=10, decimal_places=2)
    sales_tax_percentage = serializers.DecimalField(max_digits=8, decimal_places=2)
    sales_tax_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    hanger_units = serializers.IntegerField()
    hanger_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    total_amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    number_of_units = serializers.IntegerField()
    number_of_pieces = serializers.IntegerField()
    booking_date = serializers.DateTimeField()
    delivery_date = serializers.DateTimeField(allow_null=True)
    lines = QuoteLineSerializer(many=True)


class DeliveryDatesSerializer(serializers.Serializer):
    normal = serializers.DateTimeField(allow_null=True)
    urgent = serializers.DateTimeField(allow_null=True)
    same_day_urgent = serializers.DateTimeField(allow_null=True)


class BookingFormSerializer(serializers.Serializer):
    """Booking form context: dates, catalog and configuration."""

    booking_date = serializers.DateTimeField()
    delivery_dates = DeliveryDatesSerializer()
    is_same_day_urgent_enabled = serializers.BooleanField()
    items = ItemSerializer(many=True)
    problems = ProblemSerializer(many=True)
    configuration = PricingConfigurationSerializer()
