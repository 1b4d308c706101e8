"""Django admin configuration for filesystem app.

Deletes done here bypass the store, run ``manage.py recount_guilds``
afterwards to fix guild counters.
"""

from typing import Any, override

from django.contrib import admin
from django.db.models import Count, QuerySet
from django.http import HttpRequest

from server.apps.filesystem.models import (
    File,
    Folder,
    Guild,
    get_content_size,
    get_file_type,
)


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / 1024:.1f} KB'
    return f'{size_bytes / (1024 * 1024):.1f} MB'


@admin.register(Guild)
class GuildAdmin(admin.ModelAdmin[Guild]):
    """Admin interface for Guild model."""

    list_display = [
        'guild_id',
        'total_folders',
        'total_files',
        'created_at',
    ]

    search_fields = [
        'guild_id',
    ]

    readonly_fields = [
        'total_folders',
        'total_files',
        'created_at',
    ]


@admin.register(Folder)
class FolderAdmin(admin.ModelAdmin[Folder]):
    """Admin interface for Folder model."""

    list_display = [
        'name',
        'guild_id',
        'file_count',
        'created_by',
        'created_at',
    ]

    list_filter = [
        'created_at',
    ]

    search_fields = [
        'name',
        'description',
        'guild__guild_id',
    ]

    readonly_fields = ['created_at']

    fieldsets = (
        ('Folder Information', {
            'fields': ('name', 'guild', 'description'),
        }),
        ('Metadata', {
            'fields': ('created_by', 'created_at'),
        }),
    )

    def file_count(self, obj: Folder) -> int:
        """Count of files in the folder.

        Args:
            obj: Folder instance annotated by ``get_queryset``.

        Returns:
            Number of files.
        """
        return obj.file_total  # type: ignore[attr-defined]
    file_count.short_description = 'Files'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[Folder]:
        """Annotate file counts.

        Args:
            request: HTTP request.

        Returns:
            Annotated QuerySet.
        """
        return super().get_queryset(request).annotate(
            file_total=Count('files'),
        )


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model."""

    list_display = [
        'name',
        'folder',
        'file_type',
        'size_display',
        'created_by',
        'created_at',
    ]

    list_filter = [
        'file_type',
        'created_at',
    ]

    search_fields = [
        'name',
        'folder__name',
    ]

    readonly_fields = [
        'file_type',
        'size',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'folder'),
        }),
        ('Content', {
            'fields': ('content',),
        }),
        ('Metadata', {
            'fields': (
                'file_type',
                'size',
                'created_by',
                'created_at',
            ),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display content size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    @override
    def save_model(
        self,
        request: HttpRequest,
        obj: File,
        form: Any,
        change: bool,  # noqa: FBT001
    ) -> None:
        """Recompute type and size from the edited name and content.

        Args:
            request: HTTP request.
            obj: File instance being saved.
            form: Bound admin form.
            change: Whether an existing row is edited.
        """
        obj.file_type = get_file_type(obj.name)
        obj.size = get_content_size(obj.content)
        super().save_model(request, obj, form, change)

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('folder')
