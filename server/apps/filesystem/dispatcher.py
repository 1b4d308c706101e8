"""Route parsed chat commands to handlers and present the outcome.

The caller tokenizes the raw message; the dispatcher gets a command
name and argument list and sends exactly one batch of notices per
known command to its presenter: the result, or a single error notice.
"""

import logging
from collections.abc import Sequence
from typing import Final, Protocol, final

from server.apps.filesystem.commands import CommandContext, get_command
from server.apps.filesystem.exceptions import (
    FileSystemError,
    StorageFailureError,
)
from server.apps.filesystem.presentation import (
    Notice,
    build_notices,
    error_notice,
)

logger = logging.getLogger(__name__)

_UNEXPECTED_ERROR_MESSAGE: Final = 'An unexpected error occurred.'


class Presenter(Protocol):
    """Delivers notices to the user, e.g. a chat channel or stdout."""

    def send(self, notices: Sequence[Notice]) -> None:
        """Deliver notices in order."""


@final
class CommandDispatcher:
    """Runs one command per call and forwards the outcome."""

    def __init__(self, presenter: Presenter) -> None:
        """Initialize dispatcher.

        Args:
            presenter: Receiver of result and error notices.
        """
        self._presenter = presenter

    def dispatch(
        self,
        context: CommandContext,
        command_name: str,
        args: Sequence[str],
    ) -> list[Notice]:
        """Execute a command and present its result.

        Unknown commands are ignored, nothing is presented for them.
        Errors outside the ``FileSystemError`` hierarchy are presented
        as a generic error and re-raised.

        Args:
            context: Guild and author of the message.
            command_name: Command name without prefix.
            args: Tokenized arguments.

        Returns:
            Notices sent to the presenter.
        """
        command = get_command(command_name)
        if command is None:
            logger.debug('Ignoring unknown command: %s', command_name)
            return []

        logger.debug(
            'Dispatching %s for guild %s (author: %s, %d args)',
            command.name,
            context.guild_id,
            context.author,
            len(args),
        )

        try:
            result = command.handler(context, args)
        except StorageFailureError as error:
            logger.warning(
                'Command %s failed for guild %s: %s',
                command.name,
                context.guild_id,
                error,
            )
            notices = [error_notice(error.user_message)]
        except FileSystemError as error:
            logger.info(
                'Command %s rejected for guild %s: %s',
                command.name,
                context.guild_id,
                error,
            )
            notices = [error_notice(error.user_message)]
        except Exception:
            logger.exception(
                'Command %s crashed for guild %s',
                command.name,
                context.guild_id,
            )
            self._presenter.send([error_notice(_UNEXPECTED_ERROR_MESSAGE)])
            raise
        else:
            notices = build_notices(result)

        self._presenter.send(notices)
        return notices
