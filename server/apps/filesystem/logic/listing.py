"""Pagination of a guild's folder tree into bounded pages.

Chat messages have a size limit, so the listing is split between
folders, never inside one. The output depends only on the input
sequence, the same tree always gives the same page boundaries.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, final

from server.apps.filesystem.logic.results import FolderListing

PAGE_CHAR_LIMIT: Final = 4000

FIRST_PAGE_TITLE: Final = 'File System'
CONTINUED_PAGE_TITLE: Final = 'File System (Continued)'
EMPTY_LISTING_BODY: Final = 'No folders available.'

_FOLDER_LINE: Final = '📁 **{name}**\n'
_FILE_LINE: Final = '   └── 🗃️ {name}\n'
_NO_FILES_LINE: Final = '   └── ❌ No files\n'


@final
@dataclass(frozen=True, slots=True)
class ListingPage:
    """One render-ready page of the listing."""

    title: str
    body: str


@final
@dataclass(frozen=True, slots=True)
class Listing:
    """Rendered listing.

    ``empty`` is set when the guild has no folders, ``pages`` then
    holds a single placeholder page.
    """

    pages: tuple[ListingPage, ...]
    empty: bool = False


def render_folder_block(folder: FolderListing) -> str:
    """Render folder header followed by one line per file.

    Args:
        folder: Folder with its file names.

    Returns:
        Block text ending with a newline.
    """
    lines = [_FOLDER_LINE.format(name=folder.name)]
    if folder.files:
        lines.extend(_FILE_LINE.format(name=name) for name in folder.files)
    else:
        lines.append(_NO_FILES_LINE)
    return ''.join(lines)


def _page_title(page_index: int) -> str:
    if page_index == 0:
        return FIRST_PAGE_TITLE
    return CONTINUED_PAGE_TITLE


def render_listing(
    folders: Iterable[FolderListing],
    page_limit: int = PAGE_CHAR_LIMIT,
) -> Listing:
    """Split the folder tree into pages of at most ``page_limit`` chars.

    Before a folder block is appended, the current body is closed as a
    page if the block would push it over the limit. The block then
    starts the next page whole. A block longer than the limit on its
    own gets a page of its own rather than being split.

    Args:
        folders: Folders in display order.
        page_limit: Maximum body length per page.

    Returns:
        Listing with at least one page.
    """
    bodies: list[str] = []
    body = ''

    for folder in folders:
        block = render_folder_block(folder)
        if body and len(body) + len(block) > page_limit:
            bodies.append(body)
            body = ''
        body += block

    if body:
        bodies.append(body)

    if not bodies:
        return Listing(
            pages=(ListingPage(title=FIRST_PAGE_TITLE, body=EMPTY_LISTING_BODY),),
            empty=True,
        )

    return Listing(
        pages=tuple(
            ListingPage(title=_page_title(index), body=page_body)
            for index, page_body in enumerate(bodies)
        ),
    )
