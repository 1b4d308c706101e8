"""Custom storage backend for exported folders."""

import posixpath
from typing import Any, Final, final, override

from storages.backends.s3 import S3Storage

EXPORT_CONTENT_TYPE: Final = 'text/plain; charset=utf-8'


@final
class ExportStorage(S3Storage):
    """S3 storage backend for export attachments.

    Exports are kept under the ``exports/`` key prefix and are served
    as UTF-8 text downloads named after the export file.
    """

    location = 'exports'
    file_overwrite = False

    @override
    def get_object_parameters(self, name: str) -> dict[str, Any]:
        """Add content type and download name to the upload parameters.

        Args:
            name: Storage path of the export, without the key prefix.

        Returns:
            Parameters passed to S3 ``put_object``.
        """
        params = super().get_object_parameters(name)
        params.setdefault('ContentType', EXPORT_CONTENT_TYPE)
        params.setdefault(
            'ContentDisposition',
            'attachment; filename="{0}"'.format(posixpath.basename(name)),
        )
        return params
