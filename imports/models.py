# ===== IMPORTS MODELS =====
"""
Import tracking models for PW Pattaya property imports.
Every bulk import (CSV upload, JSON API, management command) runs inside an
ImportBatch that keeps counters and a per-row error log.
"""

import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class ImportBatch(models.Model):
    """
    Track property import operations for an audit trail.

    Business Rules:
    - Each import operation gets a unique batch ID
    - Uploaded files are tracked by hash so repeated uploads are visible
    - Rows that fail are logged in error_log, the rest are still imported
    """

    # =============================================================================
    # CHOICES
    # =============================================================================

    IMPORT_TYPE_CHOICES = [
        ('CSV', 'CSV Upload'),
        ('API', 'API Import'),
        ('MANUAL', 'Management Command'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('processing', 'Processing'),
        ('completed', 'Completed'),
        ('failed', 'Failed'),
    ]

    # =============================================================================
    # IDENTITY AND TRACKING
    # =============================================================================

    batch_id = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='import_batches',
        help_text="User who initiated the import"
    )

    import_type = models.CharField(
        max_length=10,
        choices=IMPORT_TYPE_CHOICES,
        help_text="Where the rows came from"
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default='pending',
        db_index=True
    )

    # =============================================================================
    # FILE INFORMATION
    # =============================================================================

    file_name = models.CharField(max_length=255, blank=True, null=True)
    file_size = models.BigIntegerField(blank=True, null=True, help_text="File size in bytes")
    file_hash = models.CharField(
        max_length=64,
        blank=True,
        null=True,
        db_index=True,
        help_text="SHA256 of the uploaded file"
    )

    # =============================================================================
    # PROCESSING METRICS
    # =============================================================================

    records_total = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    records_processed = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    records_created = models.IntegerField(default=0, validators=[MinValueValidator(0)])
    records_skipped = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text="Rows rejected by validation or creation"
    )

    has_errors = models.BooleanField(default=False)
    error_message = models.TextField(blank=True, help_text="Reason the whole batch failed")
    error_log = models.JSONField(
        default=list,
        blank=True,
        help_text="Per-row failures: [{'property': title, 'error': message}, ...]"
    )

    started_at = models.DateTimeField(blank=True, null=True)
    completed_at = models.DateTimeField(blank=True, null=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'import_batches'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='import_batc_status_4e8a21_idx'),
            models.Index(fields=['import_type', '-created_at'], name='import_batc_import__9c3f52_idx'),
        ]

    def __str__(self):
        return f"Import Batch {self.batch_id} - {self.get_import_type_display()}"

    # =============================================================================
    # PROPERTIES AND METHODS
    # =============================================================================

    @property
    def processing_duration(self):
        """Get processing duration if available."""
        if self.started_at and self.completed_at:
            return self.completed_at - self.started_at
        return None

    @property
    def success_rate(self):
        """Percentage of rows that became properties."""
        if self.records_total == 0:
            return 0
        return (self.records_created / self.records_total) * 100

    def mark_as_processing(self):
        """Mark batch as currently processing."""
        self.status = 'processing'
        self.started_at = timezone.now()
        self.save(update_fields=['status', 'started_at', 'updated_at'])

    def mark_as_completed(self):
        """Mark batch as completed; row failures are kept in error_log."""
        self.status = 'completed'
        self.completed_at = timezone.now()
        self.has_errors = bool(self.error_log)
        self.save()

    def mark_as_failed(self, error_message):
        """Mark batch as failed with error message."""
        self.status = 'failed'
        self.has_errors = True
        self.error_message = error_message
        self.completed_at = timezone.now()
        self.save(update_fields=['status', 'has_errors', 'error_message', 'completed_at', 'updated_at'])
