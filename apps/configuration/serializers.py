from decimal import Decimal
from rest_framework import serializers
from .models import PricingConfiguration


class PricingConfigurationSerializer(serializers.ModelSerializer):
    """Read/write serializer for the pricing configuration."""

    sales_tax_percentage = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=Decimal('0.00')
    )
    urgent_charges_percentage = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=Decimal('0.00')
    )
    same_day_urgent_charges_percentage = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=Decimal('0.00')
    )
    hanger_charge_per_unit = serializers.DecimalField(
        max_digits=8, decimal_places=2, min_value=Decimal('0.00')
    )
    number_of_days_for_normal = serializers.IntegerField(min_value=0)
    number_of_days_for_urgent = serializers.IntegerField(min_value=0)

    class Meta:
        model = PricingConfiguration
        fields = [
            'id',
            'sales_tax_percentage',
            'number_of_days_for_normal',
            'number_of_days_for_urgent',
            'urgent_charges_percentage',
            'same_day_urgent_charges_percentage',
            'hanger_charge_per_unit',
            'ntn_number',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
