"""Structured results returned by filesystem operations."""

from dataclasses import dataclass, field
from typing import final


@final
@dataclass(frozen=True, slots=True)
class FolderListing:
    """Folder with its file names in creation order."""

    folder_id: int
    name: str
    files: tuple[str, ...] = ()


@final
@dataclass(frozen=True, slots=True)
class GuildStats:
    """Folder and file counts of a guild."""

    total_folders: int = 0
    total_files: int = 0


@final
@dataclass(frozen=True, slots=True)
class GuildInitialized:
    """Result of ``init``."""

    guild_id: str
    created: bool


@final
@dataclass(frozen=True, slots=True)
class FolderCreated:
    """Result of ``createfolder``."""

    folder_id: int
    name: str
    description: str


@final
@dataclass(frozen=True, slots=True)
class FileAdded:
    """Result of ``addfile``."""

    file_id: int
    folder_name: str
    file_name: str
    file_type: str
    size: int


@final
@dataclass(frozen=True, slots=True)
class FileView:
    """Result of ``view``."""

    folder_name: str
    file_name: str
    content: str


@final
@dataclass(frozen=True, slots=True)
class FolderTree:
    """Result of ``list``, the whole tree of a guild."""

    guild_id: str
    folders: tuple[FolderListing, ...] = field(default_factory=tuple)


@final
@dataclass(frozen=True, slots=True)
class FileDeleted:
    """Result of ``deletefile``."""

    folder_name: str
    file_name: str
    deleted_count: int


@final
@dataclass(frozen=True, slots=True)
class FolderDeleted:
    """Result of ``deletefolder``."""

    folder_name: str
    files_deleted: int


@final
@dataclass(frozen=True, slots=True)
class FolderExport:
    """Result of ``export``: text blob and suggested attachment name."""

    folder_name: str
    filename: str
    content: str
    file_count: int


@final
@dataclass(frozen=True, slots=True)
class CommandHelp:
    """Result of ``help``: usage line and summary per command."""

    entries: tuple[tuple[str, str], ...]
