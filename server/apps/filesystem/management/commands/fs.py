"""Management command running one file system chat command."""

import logging
from collections.abc import Sequence
from typing import Any, final, override

from django.core.files.base import ContentFile
from django.core.files.storage import storages
from django.core.management.base import BaseCommand, CommandError
from django.utils.text import get_valid_filename

from server.apps.filesystem.commands import CommandContext, get_command
from server.apps.filesystem.dispatcher import CommandDispatcher
from server.apps.filesystem.presentation import Attachment, Notice

logger = logging.getLogger(__name__)

_EXPORTS_STORAGE = 'exports'


@final
class ConsolePresenter:
    """Writes notices to the command output.

    Error notices go to stderr. Attachments are saved to the exports
    storage under the guild ID and their stored name is printed.
    """

    def __init__(self, command: BaseCommand, guild_id: str) -> None:
        """Initialize presenter.

        Args:
            command: Running management command, owner of the streams.
            guild_id: Guild the attachments belong to.
        """
        self._command = command
        self._guild_id = guild_id

    def send(self, notices: Sequence[Notice]) -> None:
        """Write notices in order.

        Args:
            notices: Notices to write.
        """
        for notice in notices:
            if notice.is_error:
                self._command.stderr.write(
                    self._command.style.ERROR(notice.title),
                )
                self._command.stderr.write(notice.description)
                continue

            self._command.stdout.write(
                self._command.style.SUCCESS(notice.title),
            )
            self._command.stdout.write(notice.description)
            if notice.attachment is not None:
                saved_name = self._save_attachment(notice.attachment)
                self._command.stdout.write(f'Attachment saved: {saved_name}')

    def _save_attachment(self, attachment: Attachment) -> str:
        """Store attachment in the exports storage.

        Args:
            attachment: Attachment to store.

        Returns:
            Name under which the storage saved the file.
        """
        storage_path = '{guild}/{filename}'.format(
            guild=get_valid_filename(self._guild_id),
            filename=get_valid_filename(attachment.filename),
        )
        saved_name = storages[_EXPORTS_STORAGE].save(
            storage_path,
            ContentFile(attachment.content),
        )
        logger.info('Export attachment saved: %s', saved_name)
        return saved_name


@final
class Command(BaseCommand):
    """Run a file system command for a guild."""

    help = 'Run a virtual file system command, e.g. `fs --guild 42 list`'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            'command_name',
            help='File system command, e.g. addfile',
        )
        parser.add_argument(
            'command_args',
            nargs='*',
            help='Command arguments, already split into words',
        )
        parser.add_argument(
            '--guild',
            required=True,
            help='Guild ID the command runs in',
        )
        parser.add_argument(
            '--user',
            default='console',
            help='Name recorded as creator (default: console)',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the command.

        Args:
            args: Positional arguments (unused).
            options: Command options.

        Raises:
            CommandError: If the command name is unknown.
        """
        command_name = options['command_name']
        if get_command(command_name) is None:
            raise CommandError(f'Unknown command: {command_name}')

        guild_id = options['guild']
        context = CommandContext(guild_id=guild_id, author=options['user'])
        dispatcher = CommandDispatcher(ConsolePresenter(self, guild_id))
        dispatcher.dispatch(context, command_name, options['command_args'])
