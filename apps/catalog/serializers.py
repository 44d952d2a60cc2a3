from decimal import Decimal
from rest_framework import serializers
from .models import Item, ItemStatus, Problem


# =============================================================================
# Input Serializers
# =============================================================================

class ItemFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for item listing.

    Query Parameters:
        search (str): Match against name or code
        status (str): 'active' or 'disabled'
    """

    search = serializers.CharField(max_length=255, required=False)
    status = serializers.ChoiceField(choices=ItemStatus.choices, required=False)


class ItemInputSerializer(serializers.Serializer):
    """Validate item create/update payloads."""

    code = serializers.CharField(min_length=4, max_length=4)
    name = serializers.CharField(max_length=255)
    units_per_piece = serializers.IntegerField(min_value=0)
    unit_price = serializers.DecimalField(
        max_digits=8,
        decimal_places=2,
        min_value=Decimal('0.00')
    )
    status = serializers.ChoiceField(choices=ItemStatus.choices, default=ItemStatus.ACTIVE)
    date_added = serializers.DateField(required=False)


class ProblemInputSerializer(serializers.Serializer):
    """Validate problem label payloads."""

    name = serializers.CharField(max_length=255)


# =============================================================================
# Output Serializers
# =============================================================================

class ItemSerializer(serializers.ModelSerializer):
    """Main serializer for catalog items."""

    class Meta:
        model = Item
        fields = [
            'id',
            'code',
            'name',
            'units_per_piece',
            'unit_price',
            'status',
            'date_added',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProblemSerializer(serializers.ModelSerializer):
    """Serializer for problem labels."""

    class Meta:
        model = Problem
        fields = ['id', 'name', 'created_at', 'updated_at']
        read_only_fields = fields
