"""Virtual file system settings."""

from server.settings.components import config

# Prefix shown in usage hints, the chat adapter strips it before dispatch
FILESYSTEM_COMMAND_PREFIX = config('FILESYSTEM_COMMAND_PREFIX', default='!')

# Maximum characters per rendered listing page
FILESYSTEM_LISTING_PAGE_LIMIT = config(
    'FILESYSTEM_LISTING_PAGE_LIMIT',
    cast=int,
    default=4000,
)

# Reject duplicate folder names per guild and file names per folder
FILESYSTEM_ENFORCE_UNIQUE_NAMES = config(
    'FILESYSTEM_ENFORCE_UNIQUE_NAMES',
    cast=bool,
    default=False,
)
