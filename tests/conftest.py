"""Shared fixtures for filesystem app tests."""

from collections.abc import Sequence

import boto3
import pytest
from moto import mock_aws

from server.apps.filesystem.commands import CommandContext
from server.apps.filesystem.models import Guild
from server.apps.filesystem.presentation import Notice

_EXPORTS_BUCKET = 'guild-filesystem-exports'


class RecordingPresenter:
    """Presenter keeping every batch of notices it receives."""

    def __init__(self) -> None:
        self.batches: list[list[Notice]] = []

    def send(self, notices: Sequence[Notice]) -> None:
        self.batches.append(list(notices))


@pytest.fixture
def guild_id():
    """Guild ID used by most tests."""
    return '100000000000000001'


@pytest.fixture
def other_guild_id():
    """Second guild ID for isolation tests."""
    return '200000000000000002'


@pytest.fixture
def guild(db, guild_id):
    """Create initialized guild.

    Returns:
        Guild instance for testing.
    """
    return Guild.objects.create(guild_id=guild_id)


@pytest.fixture
def context(guild_id):
    """Command context for the test guild."""
    return CommandContext(guild_id=guild_id, author='alice')


@pytest.fixture
def presenter():
    """Presenter recording dispatched notices."""
    return RecordingPresenter()


@pytest.fixture
def export_dir(settings, tmp_path):
    """Point the exports storage at a temporary directory.

    Returns:
        Directory receiving saved exports.
    """
    settings.STORAGES = {
        **settings.STORAGES,
        'exports': {
            'BACKEND': 'django.core.files.storage.FileSystemStorage',
            'OPTIONS': {'location': str(tmp_path)},
        },
    }
    return tmp_path


@pytest.fixture
def mock_s3():
    """Mock S3 service with exports bucket.

    Yields:
        boto3 S3 resource with exports bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=_EXPORTS_BUCKET)

        yield conn
