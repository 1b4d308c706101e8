"""Render command results as chat notices.

A notice mirrors a chat embed: title, description, colour and an
optional file attachment. Chat adapters and the ``fs`` management
command only ever see notices.
"""

from dataclasses import dataclass
from functools import singledispatch
from typing import Final, final

from django.conf import settings

from server.apps.filesystem.logic.listing import PAGE_CHAR_LIMIT, render_listing
from server.apps.filesystem.logic.results import (
    CommandHelp,
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

COLOR_INFO: Final = 0x0099FF
COLOR_SUCCESS: Final = 0x00FF00
COLOR_ERROR: Final = 0xFF0000


@final
@dataclass(frozen=True, slots=True)
class Attachment:
    """File sent along with a notice."""

    filename: str
    content: bytes


@final
@dataclass(frozen=True, slots=True)
class Notice:
    """Render-ready message."""

    title: str
    description: str
    color: int = COLOR_INFO
    attachment: Attachment | None = None

    @property
    def is_error(self) -> bool:
        """Whether this notice reports a failure."""
        return self.color == COLOR_ERROR


def error_notice(message: str) -> Notice:
    """Build the single notice shown for a failed command.

    Args:
        message: User-facing error message.

    Returns:
        Error notice.
    """
    return Notice(title='❌ Error', description=message, color=COLOR_ERROR)


@singledispatch
def build_notices(result: object) -> list[Notice]:
    """Convert an operation result into notices.

    Args:
        result: Result returned by a command handler.

    Returns:
        Notices in sending order.

    Raises:
        TypeError: If no renderer is registered for the result type.
    """
    raise TypeError(f'No notice renderer for {type(result).__name__}')


@build_notices.register
def _(result: GuildInitialized) -> list[Notice]:
    if result.created:
        description = 'The virtual file system is ready to use.'
    else:
        description = 'The virtual file system is already initialized.'
    return [Notice(
        title='📂 File System Initialized',
        description=description,
        color=COLOR_SUCCESS,
    )]


@build_notices.register
def _(result: FolderCreated) -> list[Notice]:
    return [Notice(
        title='📁 Folder Created',
        description=(
            f'Folder `{result.name}` created\n'
            f'Description: {result.description}'
        ),
    )]


@build_notices.register
def _(result: FileAdded) -> list[Notice]:
    return [Notice(
        title='📝 File Added',
        description=(
            f'File `{result.file_name}` added to folder `{result.folder_name}`'
        ),
    )]


@build_notices.register
def _(result: FileView) -> list[Notice]:
    # Fixed-width block keeps the content's own formatting
    return [Notice(
        title=f'📄 {result.file_name}',
        description=f'```{result.content}```',
    )]


@build_notices.register
def _(result: FolderTree) -> list[Notice]:
    page_limit = getattr(
        settings,
        'FILESYSTEM_LISTING_PAGE_LIMIT',
        PAGE_CHAR_LIMIT,
    )
    listing = render_listing(result.folders, page_limit=page_limit)
    color = COLOR_ERROR if listing.empty else COLOR_INFO
    return [
        Notice(title=f'📂 {page.title}', description=page.body, color=color)
        for page in listing.pages
    ]


@build_notices.register
def _(result: FileDeleted) -> list[Notice]:
    return [Notice(
        title='❌ File Deleted',
        description=(
            f'File `{result.file_name}` deleted from `{result.folder_name}`'
        ),
    )]


@build_notices.register
def _(result: FolderDeleted) -> list[Notice]:
    return [Notice(
        title='🗑 Folder Deleted',
        description=(
            f'Folder `{result.folder_name}` deleted '
            f'along with {result.files_deleted} file(s).'
        ),
    )]


@build_notices.register
def _(result: GuildStats) -> list[Notice]:
    return [Notice(
        title='📊 File System Stats',
        description=(
            f'**Total Folders:** {result.total_folders}\n'
            f'**Total Files:** {result.total_files}'
        ),
    )]


@build_notices.register
def _(result: FolderExport) -> list[Notice]:
    return [Notice(
        title='📦 Folder Exported',
        description=f'📦 Exported folder `{result.folder_name}`:',
        attachment=Attachment(
            filename=result.filename,
            content=result.content.encode('utf-8'),
        ),
    )]


@build_notices.register
def _(result: CommandHelp) -> list[Notice]:
    lines = ['Powerful file management commands:', '']
    for usage, summary in result.entries:
        lines.append(f'`{usage}`: {summary}')
    return [Notice(
        title='📖 Advanced File System Help',
        description='\n'.join(lines),
        color=COLOR_SUCCESS,
    )]
