from django.core.validators import RegexValidator
from django.db import models


branch_code_validator = RegexValidator(
    regex=r'^[A-Z0-9_]+$',
    message='Branch code may only contain uppercase letters, digits and underscores.',
)


class Branch(models.Model):
    """Shop branch; its code prefixes every receipt number issued there."""

    name = models.CharField(max_length=100)
    code = models.CharField(
        max_length=20,
        unique=True,
        validators=[branch_code_validator],
    )
    address = models.CharField(max_length=255, blank=True)
    mobile = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'branches'
        ordering = ['name']
        verbose_name_plural = 'branches'

    def __str__(self):
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        self.code = self.code.strip().upper()
        super().save(*args, **kwargs)
