# Generated manually for the initial bookings schema

from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def money(**kwargs):
    return models.DecimalField(
        decimal_places=2,
        max_digits=10,
        validators=[django.core.validators.MinValueValidator(Decimal('0.00'))],
        **kwargs
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('branches', '0001_initial'),
        ('catalog', '0001_initial'),
        ('customers', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('customer_phone', models.CharField(max_length=20)),
                ('receipt_number', models.CharField(max_length=50, unique=True)),
                ('subtotal_amount', money()),
                ('surcharge_percentage', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=8)),
                ('surcharge_amount', money(default=Decimal('0.00'))),
                ('amount_total', money()),
                ('sales_tax_percentage', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=8)),
                ('sales_tax_amount', money()),
                ('hanger_units', models.PositiveIntegerField(default=0)),
                ('hanger_amount', money(default=Decimal('0.00'))),
                ('total_amount', money()),
                ('number_of_pieces', models.PositiveIntegerField(default=0)),
                ('number_of_units', models.PositiveIntegerField(default=0)),
                ('delivery_type', models.CharField(choices=[('normal', 'Normal'), ('urgent', 'Urgent'), ('same_day_urgent', 'Same Day Urgent')], default='normal', max_length=20)),
                ('booking_date', models.DateTimeField()),
                ('delivery_date', models.DateTimeField(blank=True, null=True)),
                ('status', models.CharField(choices=[('booked', 'Booked'), ('processing', 'Processing'), ('ready', 'Ready'), ('delivered', 'Delivered'), ('cancelled', 'Cancelled')], default='booked', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('issues', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('branch', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='branches.branch')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bookings_created', to=settings.AUTH_USER_MODEL)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='customers.customer')),
            ],
            options={
                'db_table': 'bookings',
                'ordering': ['-booking_date', '-created_at'],
                'permissions': [
                    ('access_pos', 'Can access point of sale'),
                    ('update_booking_status', 'Can update booking status'),
                    ('view_reports', 'Can view booking reports'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BookingItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('units', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('unit_price', money()),
                ('line_total', money()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('booking', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='booking_items', to='bookings.booking')),
                ('item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='booking_items', to='catalog.item')),
            ],
            options={
                'db_table': 'booking_items',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='ReceiptSequence',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('last_number', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('branch', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='receipt_sequence', to='branches.branch')),
            ],
            options={
                'db_table': 'receipt_sequences',
            },
        ),
        migrations.AddIndex(
            model_name='booking',
            index=models.Index(fields=['branch', 'booking_date'], name='bookings_branch__3f1a2c_idx'),
        ),
        migrations.AddIndex(
            model_name='booking',
            index=models.Index(fields=['customer', 'booking_date'], name='bookings_custome_8b4d0e_idx'),
        ),
        migrations.AddIndex(
            model_name='booking',
            index=models.Index(fields=['status'], name='bookings_status_5c7e91_idx'),
        ),
        migrations.AddIndex(
            model_name='booking',
            index=models.Index(fields=['delivery_date'], name='bookings_deliver_a2f640_idx'),
        ),
    ]
