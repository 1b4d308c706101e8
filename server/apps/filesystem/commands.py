"""Chat command registry.

Maps command names to handlers. Handlers receive the already
tokenized argument list, check its shape and call the matching
filesystem operation.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Final, final

from django.conf import settings

from server.apps.filesystem.exceptions import InvalidArgumentError
from server.apps.filesystem.logic import fs_operations
from server.apps.filesystem.logic.results import CommandHelp

_DEFAULT_PREFIX: Final = '!'


@final
@dataclass(frozen=True, slots=True)
class CommandContext:
    """Who invoked a command and where."""

    guild_id: str
    author: str


Handler = Callable[[CommandContext, Sequence[str]], object]


@final
@dataclass(frozen=True, slots=True)
class Command:
    """Registered chat command."""

    name: str
    arguments: str
    summary: str
    handler: Handler
    aliases: tuple[str, ...] = ()

    @property
    def usage(self) -> str:
        """Usage line with the configured prefix."""
        prefix = getattr(settings, 'FILESYSTEM_COMMAND_PREFIX', _DEFAULT_PREFIX)
        return f'{prefix}{self.name} {self.arguments}'.rstrip()


def _usage_error(name: str) -> InvalidArgumentError:
    return InvalidArgumentError(f'Usage: {_COMMANDS_BY_NAME[name].usage}')


def _handle_help(context: CommandContext, args: Sequence[str]) -> CommandHelp:
    return CommandHelp(
        entries=tuple(
            (command.usage, command.summary) for command in COMMANDS
        ),
    )


def _handle_init(context: CommandContext, args: Sequence[str]) -> object:
    return fs_operations.init_guild(context.guild_id)


def _handle_create_folder(
    context: CommandContext,
    args: Sequence[str],
) -> object:
    # Only the first word is the name, the rest is the description
    if not args:
        raise InvalidArgumentError('Please provide a folder name.')
    return fs_operations.create_folder(
        context.guild_id,
        args[0],
        ' '.join(args[1:]),
        context.author,
    )


def _handle_add_file(context: CommandContext, args: Sequence[str]) -> object:
    if len(args) < 3:
        raise _usage_error('addfile')
    folder_name, file_name, *content_words = args
    return fs_operations.add_file(
        context.guild_id,
        folder_name,
        file_name,
        ' '.join(content_words),
        context.author,
    )


def _handle_view(context: CommandContext, args: Sequence[str]) -> object:
    if len(args) != 2:
        raise _usage_error('view')
    folder_name, file_name = args
    return fs_operations.view_file(context.guild_id, folder_name, file_name)


def _handle_list(context: CommandContext, args: Sequence[str]) -> object:
    return fs_operations.list_tree(context.guild_id)


def _handle_delete_file(
    context: CommandContext,
    args: Sequence[str],
) -> object:
    if len(args) != 2:
        raise _usage_error('deletefile')
    folder_name, file_name = args
    return fs_operations.delete_file(context.guild_id, folder_name, file_name)


def _handle_delete_folder(
    context: CommandContext,
    args: Sequence[str],
) -> object:
    # All words form the name, unlike createfolder
    if not args:
        raise InvalidArgumentError('Please provide a folder name.')
    return fs_operations.delete_folder(context.guild_id, ' '.join(args))


def _handle_stats(context: CommandContext, args: Sequence[str]) -> object:
    return fs_operations.get_stats(context.guild_id)


def _handle_export(context: CommandContext, args: Sequence[str]) -> object:
    if len(args) != 1:
        raise _usage_error('export')
    return fs_operations.export_folder(context.guild_id, args[0])


COMMANDS: Final[tuple[Command, ...]] = (
    Command(
        name='help',
        arguments='',
        summary='Show this help.',
        handler=_handle_help,
    ),
    Command(
        name='init',
        arguments='',
        summary='Initialize the virtual file system.',
        handler=_handle_init,
    ),
    Command(
        name='createfolder',
        arguments='<name> [description]',
        summary='Create a new folder with optional description.',
        handler=_handle_create_folder,
        aliases=('create-folder',),
    ),
    Command(
        name='addfile',
        arguments='<folder> <filename> <content>',
        summary='Add a file to a folder.',
        handler=_handle_add_file,
        aliases=('add-file',),
    ),
    Command(
        name='view',
        arguments='<folder> <filename>',
        summary='View file content.',
        handler=_handle_view,
        aliases=('view-file',),
    ),
    Command(
        name='list',
        arguments='',
        summary='List all folders and files.',
        handler=_handle_list,
    ),
    Command(
        name='deletefile',
        arguments='<folder> <filename>',
        summary='Delete a file.',
        handler=_handle_delete_file,
        aliases=('delete-file',),
    ),
    Command(
        name='deletefolder',
        arguments='<folder>',
        summary='Delete a folder and all its files.',
        handler=_handle_delete_folder,
        aliases=('delete-folder',),
    ),
    Command(
        name='stats',
        arguments='',
        summary='View file system statistics.',
        handler=_handle_stats,
    ),
    Command(
        name='export',
        arguments='<folder>',
        summary='Export folder contents as a text file.',
        handler=_handle_export,
        aliases=('export-folder',),
    ),
)

_COMMANDS_BY_NAME: Final = {
    name: command
    for command in COMMANDS
    for name in (command.name, *command.aliases)
}


def get_command(name: str) -> Command | None:
    """Find command by name or alias, case-insensitively.

    Args:
        name: Command name without prefix.

    Returns:
        Command, or None for unknown names.
    """
    return _COMMANDS_BY_NAME.get(name.lower())
