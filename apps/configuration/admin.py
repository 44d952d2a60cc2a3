from django.contrib import admin
from apps.configuration.models import PricingConfiguration


@admin.register(PricingConfiguration)
class PricingConfigurationAdmin(admin.ModelAdmin):
    """Admin interface for the pricing configuration singleton."""

    list_display = [
        'sales_tax_percentage',
        'number_of_days_for_normal',
        'number_of_days_for_urgent',
        'urgent_charges_percentage',
        'same_day_urgent_charges_percentage',
        'hanger_charge_per_unit',
        'updated_at',
    ]
    readonly_fields = ['created_at', 'updated_at']

    def has_add_permission(self, request):
        """Only one configuration row may exist."""
        return not PricingConfiguration.objects.exists()
