"""Name resolution within a single guild.

Users refer to folders and files by name, the store works with row IDs.
All "not found" outcomes are raised from here so callers never deal
with ``None`` lookups.
"""

import logging
from typing import final

from server.apps.filesystem.exceptions import NoSuchFileError, NoSuchFolderError
from server.apps.filesystem.logic import store

logger = logging.getLogger(__name__)


@final
class NameResolver:
    """Resolves folder and file names for one guild.

    Duplicate names resolve to the earliest created row.
    """

    def __init__(self, guild_id: str) -> None:
        """Initialize resolver with guild ID.

        Args:
            guild_id: Guild every lookup is scoped to.
        """
        self._guild_id = guild_id

    @property
    def guild_id(self) -> str:
        """Get the guild ID for this resolver."""
        return self._guild_id

    def resolve_folder(self, folder_name: str) -> int:
        """Resolve folder name to folder ID.

        Args:
            folder_name: Folder name as typed by the user.

        Returns:
            Folder ID.

        Raises:
            NoSuchFolderError: If the guild has no such folder.
        """
        folder_id = store.get_folder_id(self._guild_id, folder_name)
        if folder_id is None:
            logger.info(
                'Folder not found: %s (guild: %s)',
                folder_name,
                self._guild_id,
            )
            raise NoSuchFolderError(folder_name)
        return folder_id

    def resolve_file(self, folder_name: str, file_name: str) -> tuple[int, str]:
        """Resolve folder and file names to the file content.

        Args:
            folder_name: Folder name as typed by the user.
            file_name: File name as typed by the user.

        Returns:
            Tuple of (folder ID, file content).

        Raises:
            NoSuchFolderError: If the guild has no such folder.
            NoSuchFileError: If the folder has no such file.
        """
        folder_id = self.resolve_folder(folder_name)
        content = store.get_file_content(folder_id, file_name)
        if content is None:
            logger.info(
                'File not found: %s/%s (guild: %s)',
                folder_name,
                file_name,
                self._guild_id,
            )
            raise NoSuchFileError(folder_name, file_name)
        return folder_id, content
