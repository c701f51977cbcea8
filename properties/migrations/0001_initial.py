from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion

import core.validators
import properties.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('property_type', models.CharField(choices=[('boys', 'Boys'), ('girls', 'Girls'), ('co-living', 'Co-living')], max_length=20)),
                ('street', models.CharField(max_length=255)),
                ('city', models.CharField(max_length=100)),
                ('state', models.CharField(max_length=100)),
                ('pincode', models.CharField(max_length=6, validators=[core.validators.pincode_validator])),
                ('landmark', models.CharField(blank=True, max_length=255)),
                ('contact_person_name', models.CharField(max_length=100)),
                ('contact_phone', models.CharField(max_length=10, validators=[core.validators.phone_validator])),
                ('contact_email', models.EmailField(blank=True, max_length=254)),
                ('amenities', models.JSONField(blank=True, default=dict, validators=[core.validators.AmenitiesValidator(['wifi', 'ac', 'parking', 'laundry', 'meals', 'gym', 'powerBackup', 'cctv', 'refrigerator', 'tv'])])),
                ('description', models.TextField(blank=True, max_length=1000)),
                ('rules', models.TextField(blank=True, max_length=1000)),
                ('total_rooms', models.PositiveIntegerField(default=0, editable=False)),
                ('occupied_rooms', models.PositiveIntegerField(default=0, editable=False)),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive'), ('maintenance', 'Maintenance')], default='active', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Property',
                'verbose_name_plural': 'Properties',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['owner', 'status'], name='property_owner_status_idx'),
                    models.Index(fields=['city'], name='property_city_idx'),
                    models.Index(fields=['property_type'], name='property_type_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PropertyImage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('file', models.FileField(upload_to=properties.models.property_image_path, validators=[django.core.validators.FileExtensionValidator(allowed_extensions=['jpg', 'jpeg', 'png', 'webp'])])),
                ('caption', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='images', to='properties.property')),
            ],
            options={
                'verbose_name': 'Property Image',
                'verbose_name_plural': 'Property Images',
                'ordering': ['created_at'],
            },
        ),
    ]
