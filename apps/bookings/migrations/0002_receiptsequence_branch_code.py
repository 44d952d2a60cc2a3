from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('bookings', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='receiptsequence',
            name='branch_code',
            field=models.CharField(blank=True, max_length=20),
        ),
    ]
