"""
Leads Admin - PW Pattaya Back Office
"""

from django.contrib import admin, messages

from .models import Lead


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    """Admin interface for website leads with pipeline status actions."""

    list_display = ['name', 'email', 'phone', 'property', 'source', 'status', 'created_at']
    list_filter = ['status', 'source', 'created_at']
    search_fields = ['name', 'email', 'phone', 'message']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['property']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Contact', {
            'fields': ('name', 'email', 'phone'),
        }),
        ('Request', {
            'fields': ('subject', 'message', 'property', 'source'),
        }),
        ('Pipeline', {
            'fields': ('status', 'created_at', 'updated_at'),
        }),
    )

    actions = ['mark_contacted', 'mark_qualified', 'mark_closed']

    def _set_status(self, request, queryset, new_status):
        updated = queryset.update(status=new_status)
        self.message_user(request, f"{updated} leads marked as {new_status}.", messages.SUCCESS)

    def mark_contacted(self, request, queryset):
        self._set_status(request, queryset, 'contacted')
    mark_contacted.short_description = 'Mark selected as contacted'

    def mark_qualified(self, request, queryset):
        self._set_status(request, queryset, 'qualified')
    mark_qualified.short_description = 'Mark selected as qualified'

    def mark_closed(self, request, queryset):
        self._set_status(request, queryset, 'closed')
    mark_closed.short_description = 'Mark selected as closed'
