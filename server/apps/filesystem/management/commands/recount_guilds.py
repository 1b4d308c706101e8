"""Management command to rebuild guild folder and file counters."""

import logging
from typing import Any, final, override

from django.core.management.base import BaseCommand

from server.apps.filesystem.exceptions import StorageFailureError
from server.apps.filesystem.logic.store import (
    aggregate_stats,
    list_guild_ids,
    recalculate_counters,
)

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """Recalculate ``total_folders`` and ``total_files`` from rows."""

    help = 'Recalculate guild folder and file counters'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--guild',
            action='append',
            dest='guilds',
            help='Guild ID to recount, may be repeated (default: all)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show counts without updating guilds',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the recount.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        guild_ids = options['guilds'] or list_guild_ids()

        count = 0
        failed = 0

        for guild_id in guild_ids:
            try:
                if dry_run:
                    stats = aggregate_stats(guild_id)
                else:
                    stats = recalculate_counters(guild_id)
            except StorageFailureError as exc:
                self.stderr.write(f'Failed to recount {guild_id}: {exc}')
                logger.exception('Failed to recount guild: %s', guild_id)
                failed += 1
                continue

            self.stdout.write(
                f'{guild_id}: {stats.total_folders} folders, '
                f'{stats.total_files} files',
            )
            count += 1

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would recount {count} guilds'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Recounted {count} guilds, {failed} failed',
                ),
            )
