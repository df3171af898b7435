import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ImportBatch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('batch_id', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('import_type', models.CharField(choices=[('CSV', 'CSV Upload'), ('API', 'API Import'), ('MANUAL', 'Management Command')], help_text='Where the rows came from', max_length=10)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('processing', 'Processing'), ('completed', 'Completed'), ('failed', 'Failed')], db_index=True, default='pending', max_length=20)),
                ('file_name', models.CharField(blank=True, max_length=255, null=True)),
                ('file_size', models.BigIntegerField(blank=True, help_text='File size in bytes', null=True)),
                ('file_hash', models.CharField(blank=True, db_index=True, help_text='SHA256 of the uploaded file', max_length=64, null=True)),
                ('records_total', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('records_processed', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('records_created', models.IntegerField(default=0, validators=[django.core.validators.MinValueValidator(0)])),
                ('records_skipped', models.IntegerField(default=0, help_text='Rows rejected by validation or creation', validators=[django.core.validators.MinValueValidator(0)])),
                ('has_errors', models.BooleanField(default=False)),
                ('error_message', models.TextField(blank=True, help_text='Reason the whole batch failed')),
                ('error_log', models.JSONField(blank=True, default=list, help_text="Per-row failures: [{'property': title, 'error': message}, ...]")),
                ('started_at', models.DateTimeField(blank=True, null=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('created_by', models.ForeignKey(blank=True, help_text='User who initiated the import', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='import_batches', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'import_batches',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', '-created_at'], name='import_batc_status_4e8a21_idx'),
                    models.Index(fields=['import_type', '-created_at'], name='import_batc_import__9c3f52_idx'),
                ],
            },
        ),
    ]
