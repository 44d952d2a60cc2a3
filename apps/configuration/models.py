from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal


class PricingConfiguration(models.Model):
    """
    Shop-wide pricing and scheduling settings.

    A single row is expected; booking creation is blocked until it exists.
    Percentages are stored as plain numbers (5 means 5%).
    """

    sales_tax_percentage = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    number_of_days_for_normal = models.PositiveIntegerField()
    number_of_days_for_urgent = models.PositiveIntegerField()
    urgent_charges_percentage = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    same_day_urgent_charges_percentage = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    hanger_charge_per_unit = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    ntn_number = models.CharField('NTN number', max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'configurations'
        ordering = ['id']

    def __str__(self):
        return (
            f"Tax {self.sales_tax_percentage}% / "
            f"normal {self.number_of_days_for_normal}d / "
            f"urgent {self.number_of_days_for_urgent}d"
        )
