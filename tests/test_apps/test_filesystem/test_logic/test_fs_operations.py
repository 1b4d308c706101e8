"""Tests for filesystem operations."""

import datetime as dt

import pytest

from server.apps.filesystem.exceptions import (
    AlreadyExistsError,
    EmptyFolderError,
    InvalidArgumentError,
    NoSuchFileError,
    NoSuchFolderError,
)
from server.apps.filesystem.logic import fs_operations
from server.apps.filesystem.logic.results import FolderListing, GuildStats
from server.apps.filesystem.models import (
    DEFAULT_FOLDER_DESCRIPTION,
    File,
    Folder,
    Guild,
)


@pytest.mark.django_db
def test_init_guild_twice(guild_id):
    """Test second init reports the guild as already initialized."""
    first = fs_operations.init_guild(guild_id)
    second = fs_operations.init_guild(guild_id)

    assert first.created is True
    assert second.created is False
    assert Guild.objects.count() == 1


@pytest.mark.django_db
def test_create_folder_default_description(guild_id):
    """Test empty description is replaced with the placeholder."""
    created = fs_operations.create_folder(guild_id, 'docs', '', 'alice')

    assert created.name == 'docs'
    assert created.description == DEFAULT_FOLDER_DESCRIPTION
    folder = Folder.objects.get(id=created.folder_id)
    assert folder.description == DEFAULT_FOLDER_DESCRIPTION


@pytest.mark.django_db
def test_create_folder_empty_name(guild_id):
    """Test empty folder name is rejected without writing."""
    with pytest.raises(InvalidArgumentError):
        fs_operations.create_folder(guild_id, '', 'desc', 'alice')

    assert not Folder.objects.exists()


@pytest.mark.django_db
def test_create_folder_allows_duplicates_by_default(guild_id):
    """Test duplicate folder names are accepted."""
    first = fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    second = fs_operations.create_folder(guild_id, 'docs', None, 'alice')

    assert first.folder_id != second.folder_id


@pytest.mark.django_db
def test_create_folder_unique_names(guild_id, settings):
    """Test duplicates are rejected when unique names are enforced."""
    settings.FILESYSTEM_ENFORCE_UNIQUE_NAMES = True
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')

    with pytest.raises(AlreadyExistsError):
        fs_operations.create_folder(guild_id, 'docs', None, 'alice')

    assert Folder.objects.count() == 1


@pytest.mark.django_db
def test_add_then_view(guild_id):
    """Test added content is returned exactly by view."""
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')

    added = fs_operations.add_file(
        guild_id,
        'docs',
        'notes.txt',
        'hello world',
        'alice',
    )
    viewed = fs_operations.view_file(guild_id, 'docs', 'notes.txt')

    assert added.file_type == 'txt'
    assert added.size == len('hello world')
    assert viewed.content == 'hello world'


@pytest.mark.django_db
def test_add_file_missing_folder(guild_id):
    """Test adding to a missing folder writes nothing."""
    with pytest.raises(NoSuchFolderError):
        fs_operations.add_file(guild_id, 'missing', 'a.txt', 'x', 'alice')

    assert not File.objects.exists()


@pytest.mark.django_db
def test_add_file_empty_name(guild_id):
    """Test empty file name is rejected."""
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')

    with pytest.raises(InvalidArgumentError):
        fs_operations.add_file(guild_id, 'docs', '', 'x', 'alice')


@pytest.mark.django_db
def test_add_file_unique_names(guild_id, settings):
    """Test duplicate file names are rejected when enforced."""
    settings.FILESYSTEM_ENFORCE_UNIQUE_NAMES = True
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    fs_operations.add_file(guild_id, 'docs', 'a.txt', 'one', 'alice')

    with pytest.raises(AlreadyExistsError):
        fs_operations.add_file(guild_id, 'docs', 'a.txt', 'two', 'alice')

    assert File.objects.count() == 1


@pytest.mark.django_db
def test_add_file_to_earliest_duplicate_folder(guild_id):
    """Test files land in the earliest folder with the name."""
    first = fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')

    fs_operations.add_file(guild_id, 'docs', 'a.txt', 'x', 'alice')

    assert File.objects.get().folder_id == first.folder_id


@pytest.mark.django_db
def test_view_file_missing(guild_id):
    """Test view of missing file and missing folder."""
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')

    with pytest.raises(NoSuchFileError):
        fs_operations.view_file(guild_id, 'docs', 'missing.txt')
    with pytest.raises(NoSuchFolderError):
        fs_operations.view_file(guild_id, 'missing', 'a.txt')


@pytest.mark.django_db
def test_guild_isolation(guild_id, other_guild_id):
    """Test a guild never sees another guild's files."""
    fs_operations.create_folder(other_guild_id, 'docs', None, 'bob')
    fs_operations.add_file(other_guild_id, 'docs', 'a.txt', 'x', 'bob')

    with pytest.raises(NoSuchFolderError):
        fs_operations.view_file(guild_id, 'docs', 'a.txt')
    assert fs_operations.list_tree(guild_id).folders == ()
    assert fs_operations.get_stats(guild_id) == GuildStats(0, 0)


@pytest.mark.django_db
def test_list_tree(guild_id):
    """Test tree holds folders and files in creation order."""
    docs = fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    fs_operations.add_file(guild_id, 'docs', 'b.txt', 'x', 'alice')
    fs_operations.add_file(guild_id, 'docs', 'a.txt', 'x', 'alice')

    tree = fs_operations.list_tree(guild_id)

    assert tree.guild_id == guild_id
    assert tree.folders == (
        FolderListing(
            folder_id=docs.folder_id,
            name='docs',
            files=('b.txt', 'a.txt'),
        ),
    )


@pytest.mark.django_db
def test_delete_file(guild_id):
    """Test deleted files cannot be viewed."""
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    fs_operations.add_file(guild_id, 'docs', 'a.txt', 'x', 'alice')

    deleted = fs_operations.delete_file(guild_id, 'docs', 'a.txt')

    assert deleted.deleted_count == 1
    with pytest.raises(NoSuchFileError):
        fs_operations.view_file(guild_id, 'docs', 'a.txt')


@pytest.mark.django_db
def test_delete_file_missing(guild_id):
    """Test missing file and missing folder both report missing file."""
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    fs_operations.add_file(guild_id, 'docs', 'kept.txt', 'x', 'alice')
    stats_before = fs_operations.get_stats(guild_id)

    with pytest.raises(NoSuchFileError):
        fs_operations.delete_file(guild_id, 'docs', 'a.txt')
    with pytest.raises(NoSuchFileError):
        fs_operations.delete_file(guild_id, 'missing', 'a.txt')

    assert stats_before == GuildStats(1, 1)
    assert fs_operations.get_stats(guild_id) == stats_before


@pytest.mark.django_db
def test_delete_folder_leaves_no_orphans(guild_id):
    """Test folder delete removes every file of the folder."""
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    fs_operations.add_file(guild_id, 'docs', 'a.txt', 'x', 'alice')
    fs_operations.add_file(guild_id, 'docs', 'b.txt', 'y', 'alice')

    deleted = fs_operations.delete_folder(guild_id, 'docs')

    assert deleted.files_deleted == 2
    assert not File.objects.exists()
    with pytest.raises(NoSuchFolderError):
        fs_operations.view_file(guild_id, 'docs', 'a.txt')


@pytest.mark.django_db
def test_delete_folder_missing(guild_id):
    """Test deleting a missing folder raises NoSuchFolderError."""
    with pytest.raises(NoSuchFolderError):
        fs_operations.delete_folder(guild_id, 'missing')


@pytest.mark.django_db
def test_stats_follow_changes(guild_id):
    """Test stats equal the number of folders and files."""
    fs_operations.create_folder(guild_id, 'docs', None, 'alice')
    fs_operations.create_folder(guild_id, 'misc', None, 'alice')
    fs_operations.add_file(guild_id, 'docs', 'a.txt', 'x', 'alice')
    fs_operations.add_file(guild_id, 'misc', 'b.txt', 'y', 'alice')

    assert fs_operations.get_stats(guild_id) == GuildStats(2, 2)

    fs_operations.delete_folder(guild_id, 'misc')

    assert fs_operations.get_stats(guild_id) == GuildStats(1, 1)


@pytest.mark.django_db
def test_export_folder(guild_id):
    """Test export concatenates files in creation order."""
    fs_operations.create_folder(guild_id, 'notes', None, 'alice')
    fs_operations.add_file(guild_id, 'notes', 'b.txt', 'second', 'alice')
    fs_operations.add_file(guild_id, 'notes', 'a.txt', 'first', 'alice')
    now = dt.datetime(2026, 1, 1, tzinfo=dt.UTC)

    exported = fs_operations.export_folder(guild_id, 'notes', now=now)

    assert exported.content == (
        '--- b.txt ---\nsecond\n\n--- a.txt ---\nfirst\n\n'
    )
    assert exported.filename == 'notes_export_1767225600000.txt'
    assert exported.file_count == 2


@pytest.mark.django_db
def test_export_folder_empty(guild_id):
    """Test exporting an empty folder raises EmptyFolderError."""
    fs_operations.create_folder(guild_id, 'notes', None, 'alice')

    with pytest.raises(EmptyFolderError) as exc_info:
        fs_operations.export_folder(guild_id, 'notes')

    assert exc_info.value.user_message == 'No files in the folder.'


@pytest.mark.django_db
def test_export_folder_missing(guild_id):
    """Test exporting a missing folder raises NoSuchFolderError."""
    with pytest.raises(NoSuchFolderError):
        fs_operations.export_folder(guild_id, 'missing')
