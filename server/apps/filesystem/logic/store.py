"""Persistence for guilds, folders and files.

Every folder query filters by ``guild_id`` first, this is the only
isolation between guilds. Functions here never retry: database errors
are logged and re-raised as ``StorageFailureError``.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from django.db import DatabaseError, transaction
from django.db.models import Count, F  # noqa: WPS347
from django.db.models.functions import Greatest

from server.apps.filesystem.exceptions import (
    NoSuchFolderError,
    StorageFailureError,
)
from server.apps.filesystem.logic.results import FolderListing, GuildStats
from server.apps.filesystem.models import (
    File,
    Folder,
    Guild,
    get_content_size,
    get_file_type,
)

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Translate database errors into ``StorageFailureError``.

    Args:
        operation: Name of the store operation, used in logs.

    Raises:
        StorageFailureError: If the wrapped block raised DatabaseError.
    """
    try:
        yield
    except DatabaseError as error:
        logger.exception('Storage operation failed: %s', operation)
        raise StorageFailureError(operation) from error


def _adjust_counters(guild_id: str, folders: int = 0, files: int = 0) -> None:
    """Shift guild counters, clamping at zero.

    Does nothing when the guild was never initialized.

    Args:
        guild_id: Guild to update.
        folders: Change of the folder counter.
        files: Change of the file counter.
    """
    updated = Guild.objects.filter(guild_id=guild_id).update(
        total_folders=Greatest(F('total_folders') + folders, 0),
        total_files=Greatest(F('total_files') + files, 0),
    )
    if not updated:
        logger.debug(
            'Guild %s is not initialized, counters not updated',
            guild_id,
        )


def create_guild_if_absent(guild_id: str) -> bool:
    """Create guild row unless it already exists.

    Args:
        guild_id: Opaque guild identifier.

    Returns:
        True if a new row was created, False if it already existed.
    """
    with _storage_errors('create_guild_if_absent'):
        _, created = Guild.objects.get_or_create(guild_id=guild_id)
    if created:
        logger.info('Initialized file system for guild %s', guild_id)
    return created


def create_folder(
    guild_id: str,
    name: str,
    description: str,
    created_by: str,
) -> int:
    """Insert a folder.

    Args:
        guild_id: Owning guild.
        name: Folder name.
        description: Folder description.
        created_by: Name of the creating user.

    Returns:
        ID of the new folder.
    """
    with _storage_errors('create_folder'), transaction.atomic():
        folder = Folder.objects.create(
            guild_id=guild_id,
            name=name,
            description=description,
            created_by=created_by,
        )
        _adjust_counters(guild_id, folders=1)

    logger.info(
        'Folder created: %s (ID: %d, guild: %s)',
        name,
        folder.id,
        guild_id,
    )
    return folder.id


def get_folder_id(guild_id: str, name: str) -> int | None:
    """Find the earliest folder with the given name in a guild.

    Args:
        guild_id: Guild to search in.
        name: Folder name.

    Returns:
        Folder ID, or None if no folder matches.
    """
    with _storage_errors('get_folder_id'):
        folder_id = Folder.objects.filter(
            guild_id=guild_id,
            name=name,
        ).order_by('id').values_list('id', flat=True).first()
    logger.debug(
        'Folder lookup: %s (guild: %s) -> %s',
        name,
        guild_id,
        folder_id,
    )
    return folder_id


def create_file(
    folder_id: int,
    name: str,
    content: str,
    created_by: str,
) -> File:
    """Insert a file, computing its type and size.

    Args:
        folder_id: Owning folder, must exist.
        name: File name.
        content: Text content.
        created_by: Name of the creating user.

    Returns:
        Created File instance.

    Raises:
        NoSuchFolderError: If the folder was deleted in the meantime.
    """
    with _storage_errors('create_file'), transaction.atomic():
        try:
            guild_id = Folder.objects.values_list(
                'guild_id',
                flat=True,
            ).get(id=folder_id)
        except Folder.DoesNotExist:
            logger.info('Folder ID %d vanished before file insert', folder_id)
            raise NoSuchFolderError(str(folder_id)) from None
        file_instance = File.objects.create(
            folder_id=folder_id,
            name=name,
            content=content,
            file_type=get_file_type(name),
            size=get_content_size(content),
            created_by=created_by,
        )
        _adjust_counters(guild_id, files=1)

    logger.info(
        'File created: %s (ID: %d, folder ID: %d, %d bytes)',
        name,
        file_instance.id,
        folder_id,
        file_instance.size,
    )
    return file_instance


def get_file_content(folder_id: int, name: str) -> str | None:
    """Get content of the earliest file with the given name in a folder.

    Args:
        folder_id: Folder to search in.
        name: File name.

    Returns:
        File content, or None if no file matches.
    """
    with _storage_errors('get_file_content'):
        content = File.objects.filter(
            folder_id=folder_id,
            name=name,
        ).order_by('id').values_list('content', flat=True).first()
    logger.debug(
        'File lookup: %s (folder ID: %d) -> %s',
        name,
        folder_id,
        'found' if content is not None else 'missing',
    )
    return content


def list_folders(guild_id: str) -> list[tuple[int, str]]:
    """List folders of a guild in creation order.

    Args:
        guild_id: Guild to list.

    Returns:
        List of (folder ID, folder name).
    """
    with _storage_errors('list_folders'):
        return list(
            Folder.objects.filter(guild_id=guild_id).order_by(
                'id',
            ).values_list('id', 'name'),
        )


def list_files(folder_id: int) -> list[tuple[str, str]]:
    """List files of a folder in creation order.

    Args:
        folder_id: Folder to list.

    Returns:
        List of (file name, content).
    """
    with _storage_errors('list_files'):
        return list(
            File.objects.filter(folder_id=folder_id).order_by(
                'id',
            ).values_list('name', 'content'),
        )


def list_tree(guild_id: str) -> list[FolderListing]:
    """List folders of a guild with their file names.

    Uses two queries regardless of the number of folders.

    Args:
        guild_id: Guild to list.

    Returns:
        Folders in creation order, each with file names in creation order.
    """
    folders = list_folders(guild_id)
    folder_ids = [folder_id for folder_id, _ in folders]

    file_names: dict[int, list[str]] = {
        folder_id: [] for folder_id in folder_ids
    }
    with _storage_errors('list_tree'):
        rows = File.objects.filter(folder_id__in=folder_ids).order_by(
            'id',
        ).values_list('folder_id', 'name')
        for folder_id, file_name in rows:
            file_names[folder_id].append(file_name)

    return [
        FolderListing(
            folder_id=folder_id,
            name=name,
            files=tuple(file_names[folder_id]),
        )
        for folder_id, name in folders
    ]


def delete_file(guild_id: str, folder_name: str, file_name: str) -> int:
    """Delete files with the given name from a guild's folder.

    The folder is the earliest one with ``folder_name`` in the guild,
    the same folder ``get_folder_id`` resolves to.

    Args:
        guild_id: Guild owning the folder.
        folder_name: Folder name.
        file_name: File name.

    Returns:
        Number of deleted files, 0 if nothing matched.
    """
    with _storage_errors('delete_file'), transaction.atomic():
        folder_id = get_folder_id(guild_id, folder_name)
        if folder_id is None:
            return 0

        deleted, _ = File.objects.filter(
            folder_id=folder_id,
            name=file_name,
        ).delete()
        if deleted:
            _adjust_counters(guild_id, files=-deleted)

    logger.info(
        'Deleted %d file(s) named %s from folder %s (guild: %s)',
        deleted,
        file_name,
        folder_name,
        guild_id,
    )
    return deleted


def delete_folder(guild_id: str, folder_name: str) -> tuple[int, int]:
    """Delete folders with the given name and all their files atomically.

    Files are removed first so no file row is left pointing at a
    deleted folder.

    Args:
        guild_id: Guild owning the folders.
        folder_name: Folder name.

    Returns:
        Tuple of (deleted folders, deleted files). Both are 0 if no
        folder matched.
    """
    with _storage_errors('delete_folder'), transaction.atomic():
        folder_ids = list(
            Folder.objects.select_for_update().filter(
                guild_id=guild_id,
                name=folder_name,
            ).values_list('id', flat=True),
        )
        if not folder_ids:
            return 0, 0

        files_deleted, _ = File.objects.filter(
            folder_id__in=folder_ids,
        ).delete()
        folders_deleted, _ = Folder.objects.filter(id__in=folder_ids).delete()
        _adjust_counters(
            guild_id,
            folders=-folders_deleted,
            files=-files_deleted,
        )

    logger.info(
        'Deleted folder %s (guild: %s): %d folder(s), %d file(s)',
        folder_name,
        guild_id,
        folders_deleted,
        files_deleted,
    )
    return folders_deleted, files_deleted


def aggregate_stats(guild_id: str) -> GuildStats:
    """Count folders and files of a guild from the rows themselves.

    Args:
        guild_id: Guild to count.

    Returns:
        GuildStats, zeros for a guild without folders.
    """
    with _storage_errors('aggregate_stats'):
        totals = Folder.objects.filter(guild_id=guild_id).aggregate(
            total_folders=Count('id', distinct=True),
            total_files=Count('files'),
        )
    return GuildStats(
        total_folders=totals['total_folders'] or 0,
        total_files=totals['total_files'] or 0,
    )


def folder_name_exists(guild_id: str, name: str) -> bool:
    """Check if a guild already has a folder with this name."""
    with _storage_errors('folder_name_exists'):
        return Folder.objects.filter(guild_id=guild_id, name=name).exists()


def file_name_exists(folder_id: int, name: str) -> bool:
    """Check if a folder already has a file with this name."""
    with _storage_errors('file_name_exists'):
        return File.objects.filter(folder_id=folder_id, name=name).exists()


def list_guild_ids() -> list[str]:
    """List all initialized guilds."""
    with _storage_errors('list_guild_ids'):
        return list(
            Guild.objects.order_by('guild_id').values_list(
                'guild_id',
                flat=True,
            ),
        )


def recalculate_counters(guild_id: str) -> GuildStats:
    """Rebuild guild counters from actual folder and file rows.

    This is useful for fixing inconsistencies, for example after
    folders were created before the guild was initialized.

    Args:
        guild_id: Guild to recalculate.

    Returns:
        Recalculated counts.
    """
    stats = aggregate_stats(guild_id)
    with _storage_errors('recalculate_counters'):
        Guild.objects.filter(guild_id=guild_id).update(
            total_folders=stats.total_folders,
            total_files=stats.total_files,
        )

    logger.info(
        'Recalculated counters for guild %s: %d folders, %d files',
        guild_id,
        stats.total_folders,
        stats.total_files,
    )
    return stats
