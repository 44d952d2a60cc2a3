from django.contrib import admin
from apps.catalog.models import Item, Problem


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    """Admin interface for catalog items."""

    list_display = [
        'code',
        'name',
        'unit_price',
        'units_per_piece',
        'status',
        'date_added',
    ]
    list_filter = ['status', 'date_added']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['name']


@admin.register(Problem)
class ProblemAdmin(admin.ModelAdmin):
    """Admin interface for problem labels."""

    list_display = ['name', 'created_at']
    search_fields = ['name']
