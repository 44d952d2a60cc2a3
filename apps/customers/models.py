from django.db import models


class CustomerType(models.TextChoices):
    NORMAL = 'normal', 'Normal'
    REGULAR = 'regular', 'Regular'
    CORPORATE = 'corporate', 'Corporate'


class Customer(models.Model):
    """Shop customer, identified at the counter by phone number."""

    phone = models.CharField(max_length=20, unique=True)
    customer_type = models.CharField(
        max_length=50,
        choices=CustomerType.choices,
        default=CustomerType.NORMAL
    )

    # Maintained by booking creation
    number_of_bookings = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        ordering = ['-created_at']

    def __str__(self):
        return self.phone
