from decimal import Decimal

from django.db import migrations, models
import django.core.validators
import django.db.models.deletion

import core.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('properties', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('room_number', models.CharField(max_length=20)),
                ('floor', models.CharField(max_length=20)),
                ('room_type', models.CharField(choices=[('single', 'Single'), ('double', 'Double'), ('triple', 'Triple'), ('four', 'Four sharing'), ('dormitory', 'Dormitory')], max_length=20)),
                ('capacity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1, 'Capacity must be at least 1')])),
                ('current_occupancy', models.PositiveIntegerField(default=0, editable=False)),
                ('rent', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'), 'Rent must be a positive number')])),
                ('security_deposit', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('area', models.PositiveIntegerField(blank=True, help_text='Square feet', null=True)),
                ('furnishing', models.CharField(choices=[('fully-furnished', 'Fully furnished'), ('semi-furnished', 'Semi furnished'), ('unfurnished', 'Unfurnished')], default='unfurnished', max_length=20)),
                ('amenities', models.JSONField(blank=True, default=dict, validators=[core.validators.AmenitiesValidator(['ac', 'balcony', 'attachedBathroom', 'wardrobe', 'fan', 'light', 'bed', 'table', 'chair'])])),
                ('status', models.CharField(choices=[('available', 'Available'), ('occupied', 'Occupied'), ('maintenance', 'Maintenance'), ('reserved', 'Reserved')], default='available', max_length=20)),
                ('description', models.TextField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rooms', to='properties.property')),
            ],
            options={
                'verbose_name': 'Room',
                'verbose_name_plural': 'Rooms',
                'ordering': ['property', 'room_number'],
                'unique_together': {('property', 'room_number')},
                'indexes': [
                    models.Index(fields=['property', 'status'], name='room_property_status_idx'),
                    models.Index(fields=['status'], name='room_status_idx'),
                ],
            },
        ),
    ]
