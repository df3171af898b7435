# ===== IMPORTS APP ADMIN CONFIGURATION =====
"""
Django Admin interface for import management
File: imports/admin.py

Import batches are created by the API and the management command; the admin
is for monitoring progress and reading per-row errors.
"""

from django.contrib import admin
from django.utils.html import format_html, format_html_join

from .models import ImportBatch


@admin.register(ImportBatch)
class ImportBatchAdmin(admin.ModelAdmin):
    """Read-mostly admin for ImportBatch with status badges and the error log."""

    list_display = [
        'batch_id_display',
        'file_name',
        'import_type',
        'status_badge',
        'records_total',
        'records_created',
        'records_skipped',
        'created_by',
        'created_at',
    ]

    list_filter = [
        'status',
        'import_type',
        ('created_at', admin.DateFieldListFilter),
        'has_errors'
    ]

    search_fields = [
        'file_name',
        'batch_id',
        'notes',
        'error_message'
    ]

    ordering = ['-created_at']

    list_per_page = 25

    readonly_fields = [
        'batch_id',
        'import_type',
        'created_by',
        'file_name',
        'file_size_display',
        'file_hash',
        'status',
        'records_total',
        'records_processed',
        'records_created',
        'records_skipped',
        'has_errors',
        'error_message',
        'error_log_display',
        'created_at',
        'started_at',
        'completed_at',
    ]

    fieldsets = [
        ('Import Information', {
            'fields': ['batch_id', 'import_type', 'created_by', 'file_name', 'file_size_display', 'file_hash']
        }),
        ('Processing Status', {
            'fields': ['status', 'records_total', 'records_processed', 'records_created', 'records_skipped']
        }),
        ('Timing Information', {
            'fields': ['created_at', 'started_at', 'completed_at']
        }),
        ('Results and Errors', {
            'fields': ['has_errors', 'error_message', 'error_log_display', 'notes'],
            'classes': ['collapse']
        })
    ]

    def has_add_permission(self, request):
        return False

    def batch_id_display(self, obj):
        return format_html('<strong>#{}</strong>', str(obj.batch_id)[:8])
    batch_id_display.short_description = 'Batch ID'
    batch_id_display.admin_order_field = 'batch_id'

    def status_badge(self, obj):
        """Display status as colored badge"""
        status_colors = {
            'pending': '#ffc107',
            'processing': '#007bff',
            'completed': '#28a745',
            'failed': '#dc3545',
        }

        color = status_colors.get(obj.status, '#6c757d')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; border-radius: 3px; font-size: 11px; font-weight: bold;">{}</span>',
            color,
            obj.status.upper()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def file_size_display(self, obj):
        """Display file size in human readable format"""
        if obj.file_size:
            size = obj.file_size
            for unit in ['B', 'KB', 'MB']:
                if size < 1024.0:
                    return f'{size:.1f} {unit}'
                size /= 1024.0
            return f'{size:.1f} GB'
        return 'Unknown'
    file_size_display.short_description = 'File Size'

    def error_log_display(self, obj):
        if not obj.error_log:
            return '-'
        return format_html(
            '<ul>{}</ul>',
            format_html_join(
                '',
                '<li><strong>{}</strong>: {}</li>',
                ((entry.get('property', ''), entry.get('error', '')) for entry in obj.error_log)
            )
        )
    error_log_display.short_description = 'Row Errors'
