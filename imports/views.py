"""
Import endpoints for PW Pattaya.

Handles CSV uploads of the listing sheet and exposes the import batch history.
"""

import logging

from rest_framework import generics, permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .models import ImportBatch
from .serializers import CSVUploadSerializer, ImportBatchSerializer
from .services import create_import_batch, import_csv_content

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([permissions.IsAuthenticated])
def upload_csv(request):
    """
    CSV upload endpoint.

    Parses the sheet export, validates every row and imports the valid ones.

    Request:
        POST /api/v1/imports/csv/
        Content-Type: multipart/form-data
        Body: file (CSV file)

    Response:
        {
            "message": "Import completed",
            "batch_id": "5b0c...",
            "results": {"total": 4, "success": 4, "failed": 0, "successIds": [...], "errors": []},
            "validationErrors": [{"index": 2, "property": "...", "errors": ["Valid price is required"]}]
        }

    Error Response:
        {
            "error": "Error message",
            "details": "Additional error details"
        }
    """
    upload = CSVUploadSerializer(data=request.data)
    if not upload.is_valid():
        return Response(
            {
                'error': 'Invalid upload',
                'details': upload.errors,
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    uploaded_file = upload.validated_data['file']
    raw = uploaded_file.read()

    try:
        content = raw.decode('utf-8-sig')
    except UnicodeDecodeError:
        return Response(
            {
                'error': 'Invalid file encoding',
                'details': 'CSV files must be UTF-8 encoded'
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    batch = create_import_batch('CSV', request.user, uploaded_file.name, raw)
    if upload.validated_data.get('notes'):
        batch.notes = upload.validated_data['notes']
        batch.save(update_fields=['notes', 'updated_at'])

    try:
        outcome = import_csv_content(content, batch)
    except ValueError as e:
        batch.mark_as_failed(str(e))
        return Response(
            {
                'error': 'Invalid CSV file',
                'details': str(e),
                'batch_id': str(batch.batch_id),
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    logger.info(f"CSV import {batch.batch_id} by {request.user}: {outcome['results']['success']} created")

    return Response(
        {
            'message': 'Import completed',
            'batch_id': str(batch.batch_id),
            **outcome,
        },
        status=status.HTTP_200_OK
    )


class ImportBatchListView(generics.ListAPIView):
    """
    Import history, newest first (staff only).

    GET /api/v1/imports/batches/?status=completed
    """
    serializer_class = ImportBatchSerializer
    permission_classes = [permissions.IsAdminUser]
    filterset_fields = ['status', 'import_type']
    ordering_fields = ['created_at']
    search_fields = ['file_name', 'notes']

    def get_queryset(self):
        return ImportBatch.objects.select_related('created_by').all()


class ImportBatchDetailView(generics.RetrieveAPIView):
    """GET /api/v1/imports/batches/{batch_id}/ (staff only)."""
    serializer_class = ImportBatchSerializer
    permission_classes = [permissions.IsAdminUser]
    queryset = ImportBatch.objects.select_related('created_by').all()
    lookup_field = 'batch_id'
