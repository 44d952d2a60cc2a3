from rest_framework import serializers
from .models import Customer, CustomerType


# =============================================================================
# Input Serializers
# =============================================================================

class CustomerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for customer listing.

    Query Parameters:
        search (str): Part of the phone number
        customer_type (str): Filter by customer type
    """

    search = serializers.CharField(max_length=20, required=False)
    customer_type = serializers.ChoiceField(choices=CustomerType.choices, required=False)


class CustomerInputSerializer(serializers.Serializer):
    """Validate customer create/update payloads."""

    phone = serializers.CharField(max_length=20)
    customer_type = serializers.ChoiceField(
        choices=CustomerType.choices,
        default=CustomerType.NORMAL
    )


# =============================================================================
# Output Serializers
# =============================================================================

class CustomerSerializer(serializers.ModelSerializer):
    """Main serializer for customers."""

    class Meta:
        model = Customer
        fields = [
            'id',
            'phone',
            'customer_type',
            'number_of_bookings',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
