"""Exceptions for filesystem app.

Every error carries the message shown to the chat user, the dispatcher
renders exactly one error notice per failed command.
"""


class FileSystemError(Exception):
    """Base class for failures reported back to the caller."""

    default_message = 'Something went wrong.'

    def __init__(self, message: str | None = None) -> None:
        """Initialize FileSystemError.

        Args:
            message: User-facing message, falls back to the class default.
        """
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        """Message safe to show to the user."""
        return str(self)


class InvalidArgumentError(FileSystemError):
    """Raised on wrong argument count or an empty required field."""

    default_message = 'Invalid arguments.'


class NoSuchFolderError(FileSystemError):
    """Raised when a folder name does not resolve within a guild."""

    default_message = 'Folder not found.'

    def __init__(self, folder_name: str) -> None:
        """Initialize NoSuchFolderError.

        Args:
            folder_name: Name that failed to resolve.
        """
        self.folder_name = folder_name
        super().__init__()


class NoSuchFileError(FileSystemError):
    """Raised when a file name does not resolve within a folder."""

    default_message = 'File not found.'

    def __init__(self, folder_name: str, file_name: str) -> None:
        """Initialize NoSuchFileError.

        Args:
            folder_name: Folder that was searched.
            file_name: Name that failed to resolve.
        """
        self.folder_name = folder_name
        self.file_name = file_name
        super().__init__()


class EmptyFolderError(FileSystemError):
    """Raised when exporting a folder without files."""

    default_message = 'No files in the folder.'

    def __init__(self, folder_name: str) -> None:
        """Initialize EmptyFolderError.

        Args:
            folder_name: Folder that has no files.
        """
        self.folder_name = folder_name
        super().__init__()


class AlreadyExistsError(FileSystemError):
    """Raised for duplicate names when unique names are enforced."""

    default_message = 'An entry with this name already exists.'


class StorageFailureError(FileSystemError):
    """Raised when the database layer fails.

    The original error is chained as ``__cause__`` and logged,
    the user only sees a generic message.
    """

    default_message = 'Storage is unavailable, please try again later.'

    def __init__(self, operation: str) -> None:
        """Initialize StorageFailureError.

        Args:
            operation: Store operation that failed, for logs.
        """
        self.operation = operation
        super().__init__(f'Storage operation failed: {operation}')

    @property
    def user_message(self) -> str:
        """Generic message without internal details."""
        return self.default_message
