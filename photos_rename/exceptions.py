"""
Custom exception hierarchy for the photo renamer.

User facing errors carry the process exit code the command line
front-end terminates with.
"""


class PhotosRenameError(Exception):
    """Base exception for all photo renamer errors."""
    exit_code = 1


class UsageError(PhotosRenameError):
    """Raised when the command line cannot be parsed."""
    exit_code = 1


class TooManyDirectoriesError(PhotosRenameError):
    """Raised when more than one directory is given on the command line."""
    exit_code = 10

    def __init__(self, directories):
        self.directories = list(directories)
        super().__init__(
            "Trailing arguments. You can process only one directory at a time."
        )


class DirectoryNotFoundError(PhotosRenameError):
    """Raised when the directory to process does not exist."""
    exit_code = 11

    def __init__(self, directory):
        self.directory = directory
        super().__init__(f"Directory '{directory}' does not exist. Aborted.")


class InvalidExtensionError(PhotosRenameError):
    """Raised when an extension option holds an unsupported value."""
    exit_code = 12

    def __init__(self, value, allowed="'', 'jpg' or 'jpeg'"):
        self.value = value
        super().__init__(f"Invalid extension '{value}' (expected {allowed}).")


class ConfirmationDeclined(PhotosRenameError):
    """Raised when the user does not confirm the rename plan."""
    exit_code = 100

    def __init__(self):
        super().__init__("Aborted.")


class MetadataExtractionError(PhotosRenameError):
    """Raised when metadata cannot be extracted from a file."""
    pass


class FileOperationError(PhotosRenameError):
    """Raised when a single rename fails."""

    def __init__(self, source, target, reason):
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to rename {source} -> {target}: {reason}")
