"""
API Serializers for PW Pattaya Leads.

- LeadSerializer: public contact form submission and staff detail view
- LeadStatusSerializer: staff updates, which only move the pipeline status
"""

from rest_framework import serializers

from properties.models import Property
from .models import Lead


class LeadSerializer(serializers.ModelSerializer):
    """Contact form payload. name, email, phone and message are required."""

    property = serializers.PrimaryKeyRelatedField(
        queryset=Property.objects.all(),
        required=False,
        allow_null=True
    )
    property_title = serializers.CharField(source='property.title', read_only=True, default=None)

    class Meta:
        model = Lead
        fields = [
            'id',
            'name',
            'email',
            'phone',
            'subject',
            'message',
            'property',
            'property_title',
            'source',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'status', 'created_at', 'updated_at']
        extra_kwargs = {
            'subject': {'required': False, 'allow_blank': True, 'allow_null': True},
            'source': {'required': False},
        }

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value

    def validate_message(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Message cannot be blank.")
        return value


class LeadStatusSerializer(serializers.ModelSerializer):
    """Staff update: only the status field is writable."""

    class Meta:
        model = Lead
        fields = ['id', 'name', 'email', 'phone', 'subject', 'message', 'property',
                  'source', 'status', 'created_at', 'updated_at']
        read_only_fields = ['id', 'name', 'email', 'phone', 'subject', 'message', 'property',
                            'source', 'created_at', 'updated_at']
        extra_kwargs = {'status': {'required': True}}
