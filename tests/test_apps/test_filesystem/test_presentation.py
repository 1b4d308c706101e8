"""Tests for result to notice rendering."""

import pytest

from server.apps.filesystem.logic.results import (
    CommandHelp,
    FileAdded,
    FileDeleted,
    FileView,
    FolderCreated,
    FolderDeleted,
    FolderExport,
    FolderListing,
    FolderTree,
    GuildInitialized,
    GuildStats,
)
from server.apps.filesystem.presentation import (
    COLOR_ERROR,
    COLOR_INFO,
    COLOR_SUCCESS,
    build_notices,
    error_notice,
)


def test_error_notice():
    """Test error notice is red and titled as an error."""
    notice = error_notice('Folder not found.')

    assert notice.title == '❌ Error'
    assert notice.description == 'Folder not found.'
    assert notice.color == COLOR_ERROR
    assert notice.is_error


@pytest.mark.parametrize(('created', 'expected'), [
    (True, 'ready to use'),
    (False, 'already initialized'),
])
def test_guild_initialized(created, expected):
    """Test init notice tells a new guild from an existing one."""
    notices = build_notices(GuildInitialized(guild_id='1', created=created))

    assert len(notices) == 1
    assert notices[0].color == COLOR_SUCCESS
    assert expected in notices[0].description


def test_folder_created():
    """Test folder notice shows name and description."""
    (notice,) = build_notices(
        FolderCreated(folder_id=1, name='docs', description='Docs'),
    )

    assert notice.title == '📁 Folder Created'
    assert notice.description == 'Folder `docs` created\nDescription: Docs'
    assert notice.color == COLOR_INFO


def test_file_added_and_deleted():
    """Test file notices name the file and the folder."""
    (added,) = build_notices(FileAdded(
        file_id=1,
        folder_name='docs',
        file_name='a.txt',
        file_type='txt',
        size=1,
    ))
    (deleted,) = build_notices(
        FileDeleted(folder_name='docs', file_name='a.txt', deleted_count=1),
    )

    assert added.description == 'File `a.txt` added to folder `docs`'
    assert deleted.description == 'File `a.txt` deleted from `docs`'


def test_file_view_wraps_content():
    """Test content is shown in a code block."""
    (notice,) = build_notices(
        FileView(folder_name='docs', file_name='a.txt', content='hi there'),
    )

    assert notice.title == '📄 a.txt'
    assert notice.description == '```hi there```'


def test_folder_deleted():
    """Test folder delete notice reports removed files."""
    (notice,) = build_notices(FolderDeleted(folder_name='docs', files_deleted=3))

    assert notice.description == (
        'Folder `docs` deleted along with 3 file(s).'
    )


def test_stats():
    """Test stats notice shows both counts."""
    (notice,) = build_notices(GuildStats(total_folders=2, total_files=5))

    assert notice.description == '**Total Folders:** 2\n**Total Files:** 5'


def test_export_has_attachment():
    """Test export notice carries the blob as UTF-8 attachment."""
    (notice,) = build_notices(FolderExport(
        folder_name='notes',
        filename='notes_export_1.txt',
        content='--- a.txt ---\nhé\n\n',
        file_count=1,
    ))

    assert notice.attachment is not None
    assert notice.attachment.filename == 'notes_export_1.txt'
    assert notice.attachment.content == '--- a.txt ---\nhé\n\n'.encode()


def test_help_lists_entries():
    """Test help notice holds one line per command."""
    (notice,) = build_notices(CommandHelp(entries=(
        ('!init', 'Initialize.'),
        ('!list', 'List.'),
    )))

    assert notice.color == COLOR_SUCCESS
    assert '`!init`: Initialize.' in notice.description
    assert '`!list`: List.' in notice.description


def test_tree_empty_is_error_colored():
    """Test empty tree renders one red placeholder notice."""
    (notice,) = build_notices(FolderTree(guild_id='1'))

    assert notice.color == COLOR_ERROR
    assert notice.title == '📂 File System'
    assert notice.description == 'No folders available.'


def test_tree_respects_page_limit_setting(settings):
    """Test listing pages follow the configured limit."""
    settings.FILESYSTEM_LISTING_PAGE_LIMIT = 40
    tree = FolderTree(guild_id='1', folders=(
        FolderListing(folder_id=1, name='one', files=('a.txt',)),
        FolderListing(folder_id=2, name='two', files=('b.txt',)),
    ))

    notices = build_notices(tree)

    assert [notice.title for notice in notices] == [
        '📂 File System',
        '📂 File System (Continued)',
    ]
    assert all(notice.color == COLOR_INFO for notice in notices)


def test_unknown_result_type():
    """Test unregistered results are a programming error."""
    with pytest.raises(TypeError):
        build_notices(object())
