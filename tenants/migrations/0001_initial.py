from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion

import core.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('properties', '0001_initial'),
        ('rooms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Tenant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(max_length=100)),
                ('email', models.EmailField(max_length=254)),
                ('phone', models.CharField(max_length=10, validators=[core.validators.phone_validator])),
                ('alternate_phone', models.CharField(blank=True, max_length=10, validators=[core.validators.phone_validator])),
                ('emergency_contact_name', models.CharField(max_length=100)),
                ('emergency_contact_relation', models.CharField(max_length=50)),
                ('emergency_contact_phone', models.CharField(max_length=10, validators=[core.validators.phone_validator])),
                ('id_proof_type', models.CharField(choices=[('aadhar', 'Aadhar'), ('passport', 'Passport'), ('driving_license', 'Driving License'), ('voter_id', 'Voter ID'), ('other', 'Other')], max_length=20)),
                ('id_proof_number', models.CharField(max_length=50)),
                ('occupation_type', models.CharField(choices=[('student', 'Student'), ('working_professional', 'Working Professional'), ('self_employed', 'Self Employed'), ('other', 'Other')], max_length=30)),
                ('company_name', models.CharField(blank=True, max_length=150)),
                ('designation', models.CharField(blank=True, max_length=100)),
                ('permanent_street', models.CharField(blank=True, max_length=255)),
                ('permanent_city', models.CharField(blank=True, max_length=100)),
                ('permanent_state', models.CharField(blank=True, max_length=100)),
                ('permanent_pincode', models.CharField(blank=True, max_length=6, validators=[core.validators.pincode_validator])),
                ('move_in_date', models.DateField()),
                ('move_out_date', models.DateField(blank=True, null=True)),
                ('rent_amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'), 'Rent amount must be positive')])),
                ('security_deposit', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('security_deposit_paid', models.BooleanField(default=False)),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive'), ('notice_period', 'Notice Period')], default='active', max_length=20)),
                ('notice_start_date', models.DateField(blank=True, null=True)),
                ('notice_end_date', models.DateField(blank=True, null=True)),
                ('notice_reason', models.TextField(blank=True)),
                ('agreement_start_date', models.DateField(blank=True, null=True)),
                ('agreement_end_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tenants', to='properties.property')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tenants', to='rooms.room')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='tenant_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Tenant',
                'verbose_name_plural': 'Tenants',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['property', 'status'], name='tenant_property_status_idx'),
                    models.Index(fields=['room', 'status'], name='tenant_room_status_idx'),
                    models.Index(fields=['status'], name='tenant_status_idx'),
                    models.Index(fields=['move_in_date'], name='tenant_move_in_idx'),
                ],
            },
        ),
    ]
