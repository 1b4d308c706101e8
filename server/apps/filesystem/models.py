"""Database models for filesystem app.

Table and column names are shared with other tooling reading the
database directly, keep ``db_table`` and ``db_column`` values stable.
"""

from pathlib import Path
from typing import Final, final, override

from django.db import models

# Constants for field max lengths
_GUILD_ID_MAX_LENGTH: Final = 64
_NAME_MAX_LENGTH: Final = 255
_CREATED_BY_MAX_LENGTH: Final = 150

DEFAULT_FOLDER_DESCRIPTION: Final = 'No description provided'


def get_file_type(file_name: str) -> str:
    """Get file type from file name.

    Args:
        file_name: File name (e.g., 'Notes.TXT').

    Returns:
        Extension without dot, lowercase (e.g., 'txt').
        Returns empty string if no extension.
    """
    extension = Path(file_name).suffix
    return extension.lstrip('.').lower()


def get_content_size(content: str) -> int:
    """Get stored size of file content.

    Args:
        content: Text content.

    Returns:
        UTF-8 encoded length in bytes.
    """
    return len(content.encode('utf-8'))


@final
class Guild(models.Model):
    """Tenant owning a virtual file system.

    Created by the ``init`` command and never deleted. Counters are
    kept in sync by the store and can be rebuilt with
    ``manage.py recount_guilds``.
    """

    guild_id = models.CharField(
        max_length=_GUILD_ID_MAX_LENGTH,
        primary_key=True,
    )

    total_folders = models.IntegerField(default=0)
    total_files = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        db_table = 'guilds'
        verbose_name = 'Guild'  # type: ignore[mutable-override]
        verbose_name_plural = 'Guilds'  # type: ignore[mutable-override]

        constraints = [
            models.CheckConstraint(
                condition=models.Q(total_folders__gte=0),
                name='guilds_total_folders_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(total_files__gte=0),
                name='guilds_total_files_non_negative',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.guild_id


@final
class Folder(models.Model):
    """Folder scoped to a guild.

    The guild reference has no database constraint: folders may be
    created before ``init`` was run for the guild. Names are not unique
    unless ``FILESYSTEM_ENFORCE_UNIQUE_NAMES`` is enabled.
    """

    guild = models.ForeignKey(
        Guild,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        db_column='guild_id',
        related_name='folders',
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        db_column='folder_name',
    )

    description = models.TextField(default=DEFAULT_FOLDER_DESCRIPTION)

    created_by = models.CharField(max_length=_CREATED_BY_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        db_table = 'folders'
        verbose_name = 'Folder'  # type: ignore[mutable-override]
        verbose_name_plural = 'Folders'  # type: ignore[mutable-override]
        ordering = ['id']

        indexes = [
            # Every lookup filters by guild first
            models.Index(
                fields=['guild', 'name'],
                name='folders_guild_name_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.guild_id}:{self.name}'


@final
class File(models.Model):
    """Text file stored inside a folder.

    ``file_type`` and ``size`` are computed once at write time.
    """

    folder = models.ForeignKey(
        Folder,
        on_delete=models.CASCADE,
        db_column='folder_id',
        related_name='files',
    )

    name = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        db_column='file_name',
    )

    content = models.TextField(blank=True, default='')

    file_type = models.CharField(
        max_length=_NAME_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Lowercase extension without dot',
    )

    size = models.IntegerField(
        default=0,
        help_text='Content size in bytes',
    )

    created_by = models.CharField(max_length=_CREATED_BY_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        db_table = 'files'
        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering = ['id']

        indexes = [
            models.Index(
                fields=['folder', 'name'],
                name='files_folder_name_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.folder_id}:{self.name}'
