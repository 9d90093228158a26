# Generated manually for participants, registrations, payments and health declarations

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import apps.registrations.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('programs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('id_number', models.CharField(db_index=True, max_length=20, unique=True)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('health_approval', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'participants',
                'ordering': ['last_name', 'first_name'],
            },
        ),
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('required_amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('discount_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('discount_approved', models.BooleanField(default=False)),
                ('registration_date', models.DateField(default=django.utils.timezone.localdate)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('participant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='registrations.participant')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='programs.product')),
            ],
            options={
                'db_table': 'registrations',
                'ordering': ['-registration_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['product', 'registration_date'], name='registratio_product_2f6a1b_idx'),
                ],
                'unique_together': {('product', 'participant')},
            },
        ),
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('kind', models.CharField(choices=[('payment', 'Payment'), ('discount', 'Discount')], default='payment', max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('receipt_number', models.CharField(blank=True, max_length=50)),
                ('payment_date', models.DateField(default=django.utils.timezone.localdate)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('registration', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payments', to='registrations.registration')),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['payment_date', 'created_at'],
                'indexes': [
                    models.Index(fields=['registration', 'kind'], name='payments_registr_8c3e5d_idx'),
                    models.Index(fields=['receipt_number'], name='payments_receipt_1a7f42_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='HealthDeclaration',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('token', models.CharField(db_index=True, default=apps.registrations.models.generate_declaration_token, editable=False, max_length=64, unique=True)),
                ('form_status', models.CharField(choices=[('pending', 'Pending'), ('sent', 'Sent'), ('signed', 'Signed')], default='pending', max_length=20)),
                ('parent_name', models.CharField(blank=True, max_length=200)),
                ('parent_id', models.CharField(blank=True, max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('signature', models.TextField(blank=True)),
                ('submission_date', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('participant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='health_declarations', to='registrations.participant')),
            ],
            options={
                'db_table': 'health_declarations',
                'ordering': ['-created_at'],
            },
        ),
    ]
