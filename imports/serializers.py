# ===== IMPORTS SERIALIZERS =====
"""
Serializers for the property import API.
Handles ImportBatch serialization and CSV upload validation.
"""

import logging

from django.conf import settings
from rest_framework import serializers

from .models import ImportBatch

logger = logging.getLogger(__name__)


# =============================================================================
# IMPORT BATCH SERIALIZERS
# =============================================================================

class ImportBatchSerializer(serializers.ModelSerializer):
    """Import batch with counters, timing and the per-row error log."""

    processing_duration = serializers.SerializerMethodField()
    success_rate = serializers.SerializerMethodField()
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    import_type_display = serializers.CharField(source='get_import_type_display', read_only=True)
    created_by = serializers.StringRelatedField()

    class Meta:
        model = ImportBatch
        fields = [
            'id',
            'batch_id',
            'import_type',
            'import_type_display',
            'status',
            'status_display',
            'file_name',
            'file_size',
            'records_total',
            'records_processed',
            'records_created',
            'records_skipped',
            'has_errors',
            'error_message',
            'error_log',
            'created_by',
            'created_at',
            'started_at',
            'completed_at',
            'processing_duration',
            'success_rate',
        ]
        read_only_fields = fields

    def get_processing_duration(self, obj):
        """Get processing duration in seconds."""
        duration = obj.processing_duration
        return duration.total_seconds() if duration else None

    def get_success_rate(self, obj):
        return round(obj.success_rate, 1)


# =============================================================================
# FILE UPLOAD SERIALIZERS
# =============================================================================

class CSVUploadSerializer(serializers.Serializer):
    """Uploaded CSV export of the listing sheet."""

    file = serializers.FileField()
    notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)

    def validate_file(self, file):
        max_size = settings.IMPORT_MAX_FILE_SIZE
        if file.size > max_size:
            raise serializers.ValidationError(
                f"File size ({file.size} bytes) exceeds limit of {max_size} bytes"
            )

        if not file.name.lower().endswith('.csv'):
            raise serializers.ValidationError("Only CSV files are supported")

        return file
