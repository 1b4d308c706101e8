"""Business logic for virtual file system operations.

One function per chat command. Each function validates its input,
resolves names and only then writes, so a failed lookup never leaves
partial changes behind.
"""

import logging
from datetime import datetime

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from server.apps.filesystem.exceptions import (
    AlreadyExistsError,
    EmptyFolderError,
    InvalidArgumentError,
    NoSuchFileError,
    NoSuchFolderError,
)
from server.apps.filesystem.logic import store
from server.apps.filesystem.logic.resolver import NameResolver
from server.apps.filesystem.logic.results import (
    FileAdded,
    FileDeleted,
    FileView,
    FolderCreated,
    FolderDeleted,
    FolderExport,
    FolderTree,
    GuildInitialized,
    GuildStats,
)
from server.apps.filesystem.models import DEFAULT_FOLDER_DESCRIPTION

logger = logging.getLogger(__name__)


def _unique_names_enforced() -> bool:
    """Check whether duplicate folder and file names are rejected.

    Returns:
        Setting value, False by default.
    """
    return getattr(settings, 'FILESYSTEM_ENFORCE_UNIQUE_NAMES', False)


def _require_name(value: str, message: str) -> str:
    """Reject empty or blank names.

    Args:
        value: Name to check.
        message: Error message for the user.

    Returns:
        The unchanged name.

    Raises:
        InvalidArgumentError: If the name is empty.
    """
    if not value or not value.strip():
        raise InvalidArgumentError(message)
    return value


def init_guild(guild_id: str) -> GuildInitialized:
    """Register the guild, repeated calls are no-ops.

    Args:
        guild_id: Guild to initialize.

    Returns:
        GuildInitialized telling whether the guild row was created.
    """
    created = store.create_guild_if_absent(guild_id)
    return GuildInitialized(guild_id=guild_id, created=created)


def create_folder(
    guild_id: str,
    name: str,
    description: str | None,
    created_by: str,
) -> FolderCreated:
    """Create a folder in the guild.

    Args:
        guild_id: Owning guild.
        name: Folder name.
        description: Optional description, defaults to a placeholder.
        created_by: Name of the creating user.

    Returns:
        FolderCreated with the new folder ID.

    Raises:
        InvalidArgumentError: If the name is empty.
        AlreadyExistsError: If names are unique and the name is taken.
    """
    _require_name(name, 'Please provide a folder name.')
    description = description or DEFAULT_FOLDER_DESCRIPTION

    if _unique_names_enforced() and store.folder_name_exists(guild_id, name):
        raise AlreadyExistsError(f'Folder `{name}` already exists.')

    folder_id = store.create_folder(guild_id, name, description, created_by)
    return FolderCreated(
        folder_id=folder_id,
        name=name,
        description=description,
    )


def add_file(
    guild_id: str,
    folder_name: str,
    file_name: str,
    content: str,
    created_by: str,
) -> FileAdded:
    """Add a text file to an existing folder.

    Args:
        guild_id: Guild owning the folder.
        folder_name: Target folder name.
        file_name: New file name.
        content: File content.
        created_by: Name of the creating user.

    Returns:
        FileAdded with computed type and size.

    Raises:
        InvalidArgumentError: If folder or file name is empty.
        NoSuchFolderError: If the folder does not exist.
        AlreadyExistsError: If names are unique and the name is taken.
    """
    _require_name(folder_name, 'Please provide a folder name.')
    _require_name(file_name, 'Please provide a file name.')

    resolver = NameResolver(guild_id)
    with transaction.atomic():
        folder_id = resolver.resolve_folder(folder_name)
        if _unique_names_enforced() and store.file_name_exists(
            folder_id,
            file_name,
        ):
            raise AlreadyExistsError(
                f'File `{file_name}` already exists in `{folder_name}`.',
            )
        file_instance = store.create_file(
            folder_id,
            file_name,
            content,
            created_by,
        )

    return FileAdded(
        file_id=file_instance.id,
        folder_name=folder_name,
        file_name=file_name,
        file_type=file_instance.file_type,
        size=file_instance.size,
    )


def view_file(guild_id: str, folder_name: str, file_name: str) -> FileView:
    """Read file content.

    Raises:
        NoSuchFolderError: If the folder does not exist.
        NoSuchFileError: If the file does not exist.
    """
    _, content = NameResolver(guild_id).resolve_file(folder_name, file_name)
    return FileView(
        folder_name=folder_name,
        file_name=file_name,
        content=content,
    )


def list_tree(guild_id: str) -> FolderTree:
    """Get all folders of the guild with their file names."""
    return FolderTree(
        guild_id=guild_id,
        folders=tuple(store.list_tree(guild_id)),
    )


def delete_file(guild_id: str, folder_name: str, file_name: str) -> FileDeleted:
    """Delete a file from a folder.

    A missing folder is reported the same way as a missing file.

    Args:
        guild_id: Guild owning the folder.
        folder_name: Folder name.
        file_name: File name.

    Returns:
        FileDeleted with the number of removed rows.

    Raises:
        NoSuchFileError: If no such file exists in the folder.
    """
    deleted = store.delete_file(guild_id, folder_name, file_name)
    if not deleted:
        raise NoSuchFileError(folder_name, file_name)
    return FileDeleted(
        folder_name=folder_name,
        file_name=file_name,
        deleted_count=deleted,
    )


def delete_folder(guild_id: str, folder_name: str) -> FolderDeleted:
    """Delete a folder together with all its files.

    Args:
        guild_id: Guild owning the folder.
        folder_name: Folder name.

    Returns:
        FolderDeleted with the number of removed files.

    Raises:
        InvalidArgumentError: If the name is empty.
        NoSuchFolderError: If the folder does not exist.
    """
    _require_name(folder_name, 'Please provide a folder name.')

    folders_deleted, files_deleted = store.delete_folder(guild_id, folder_name)
    if not folders_deleted:
        raise NoSuchFolderError(folder_name)
    return FolderDeleted(folder_name=folder_name, files_deleted=files_deleted)


def get_stats(guild_id: str) -> GuildStats:
    """Count folders and files of the guild."""
    return store.aggregate_stats(guild_id)


def _export_filename(folder_name: str, now: datetime) -> str:
    """Build attachment name from folder name and request time.

    Args:
        folder_name: Exported folder.
        now: Request time.

    Returns:
        Name like 'notes_export_1767225600000.txt'.
    """
    timestamp_ms = int(now.timestamp() * 1000)
    return f'{folder_name}_export_{timestamp_ms}.txt'


def export_folder(
    guild_id: str,
    folder_name: str,
    now: datetime | None = None,
) -> FolderExport:
    """Concatenate all files of a folder into one text blob.

    Each file becomes a ``--- name ---`` header, its content and a
    blank line, in creation order.

    Args:
        guild_id: Guild owning the folder.
        folder_name: Folder to export.
        now: Request time for the attachment name, defaults to now.

    Returns:
        FolderExport with blob and suggested filename.

    Raises:
        NoSuchFolderError: If the folder does not exist.
        EmptyFolderError: If the folder has no files.
    """
    folder_id = NameResolver(guild_id).resolve_folder(folder_name)
    files = store.list_files(folder_id)
    if not files:
        raise EmptyFolderError(folder_name)

    blob = ''.join(
        f'--- {file_name} ---\n{content}\n\n'
        for file_name, content in files
    )
    filename = _export_filename(folder_name, now or timezone.now())

    logger.info(
        'Exported folder %s (guild: %s): %d file(s) as %s',
        folder_name,
        guild_id,
        len(files),
        filename,
    )
    return FolderExport(
        folder_name=folder_name,
        filename=filename,
        content=blob,
        file_count=len(files),
    )
