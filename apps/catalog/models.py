from django.core.validators import MinLengthValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal


class ItemStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    DISABLED = 'disabled', 'Disabled'


class Item(models.Model):
    """Garment or article the shop cleans, with its unit price."""

    code = models.CharField(
        max_length=4,
        unique=True,
        validators=[MinLengthValidator(4)]
    )
    name = models.CharField(max_length=255)

    # Secondary unit count per piece (a suit is 2 units); reporting only
    units_per_piece = models.PositiveIntegerField(default=0)
    unit_price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=20,
        choices=ItemStatus.choices,
        default=ItemStatus.ACTIVE
    )
    date_added = models.DateField(default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['name']),
        ]
        ordering = ['name']

    def __str__(self):
        return f"{self.code} - {self.name}"

    @property
    def is_active(self):
        return self.status == ItemStatus.ACTIVE


class Problem(models.Model):
    """Issue label recorded against a booking (stain, missing button, ...)."""

    name = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'problems'
        ordering = ['name']

    def __str__(self):
        return self.name
