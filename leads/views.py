"""
Views for the leads app.

Visitors submit leads anonymously; listing and managing them is for staff.
"""

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, permissions, status, viewsets
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from services.notifications import safe_send_lead_notification
from .models import Lead
from .serializers import LeadSerializer, LeadStatusSerializer

logger = logging.getLogger(__name__)


class LeadViewSet(viewsets.ModelViewSet):
    """
    API endpoint for Leads.

    POST /api/v1/leads/        - public contact form (throttled)
    GET  /api/v1/leads/        - staff list, filter by ?status= and ?property=
    GET/PUT/PATCH/DELETE /{id} - staff; updates change status only
    """
    queryset = Lead.objects.select_related('property').all()
    serializer_class = LeadSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'property', 'source']
    search_fields = ['name', 'email', 'phone', 'message']
    ordering_fields = ['created_at', 'status']
    ordering = ['-created_at']
    throttle_scope = 'leads'

    def get_permissions(self):
        if self.action == 'create':
            return [permissions.AllowAny()]
        return [permissions.IsAdminUser()]

    def get_throttles(self):
        if self.action == 'create':
            return [ScopedRateThrottle()]
        return super().get_throttles()

    def get_serializer_class(self):
        if self.action in ('update', 'partial_update'):
            return LeadStatusSerializer
        return LeadSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {
                    'error': 'Missing required fields',
                    'details': serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        lead = serializer.save()
        logger.info(f"Lead #{lead.pk} received from {lead.email} via {lead.source}")

        safe_send_lead_notification(lead)

        return Response(
            {'success': True, 'lead': self.get_serializer(lead).data},
            status=status.HTTP_201_CREATED
        )
