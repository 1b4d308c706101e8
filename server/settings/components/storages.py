"""Django storage configuration for exported folders.

Exports are delivered as attachments. They go to:
- an S3-compatible bucket (MinIO locally, Cloudflare R2 in production)
  when ``AWS_STORAGE_BUCKET_NAME`` is set
- local ``MEDIA_ROOT/exports`` otherwise
"""

from typing import Any, Final

from server.settings.components import config
from server.settings.components.common import MEDIA_ROOT

_EXPORTS_BUCKET = config('AWS_STORAGE_BUCKET_NAME', default='')

if _EXPORTS_BUCKET:
    _EXPORTS_STORAGE: dict[str, Any] = {
        'BACKEND': 'server.apps.filesystem.infrastructure.storage.ExportStorage',
        'OPTIONS': {
            'bucket_name': _EXPORTS_BUCKET,
            'access_key': config('AWS_ACCESS_KEY_ID'),
            'secret_key': config('AWS_SECRET_ACCESS_KEY'),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='auto',
            ),
            'file_overwrite': False,  # Prevent accidental overwrites
            'default_acl': None,  # Inherit bucket ACL
        },
    }
else:
    _EXPORTS_STORAGE = {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
        'OPTIONS': {
            'location': str(MEDIA_ROOT.joinpath('exports')),
        },
    }

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'exports': _EXPORTS_STORAGE,
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
