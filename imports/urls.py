"""
URL configuration for imports app.

Endpoints:
    POST /api/v1/imports/csv/                  - Upload and import a sheet CSV export
    GET  /api/v1/imports/batches/              - Import history (staff)
    GET  /api/v1/imports/batches/{batch_id}/   - Single batch with error log (staff)

The JSON bulk import lives at /api/v1/properties/import/.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('csv/', views.upload_csv, name='upload-csv'),
    path('batches/', views.ImportBatchListView.as_view(), name='import-batch-list'),
    path('batches/<uuid:batch_id>/', views.ImportBatchDetailView.as_view(), name='import-batch-detail'),
]
