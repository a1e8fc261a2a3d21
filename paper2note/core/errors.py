"""
Exception taxonomy for paper2note
"""


class Paper2NoteError(Exception):
    """Base class for every error raised by paper2note."""


class InvalidUrlError(Paper2NoteError):
    """Raised when clipboard content is not an Arxiv URL or carries no paper id."""


class RemoteFetchError(Paper2NoteError):
    """Raised when an external API answers with a non-200 status or a malformed body."""


class ExtractionError(Paper2NoteError):
    """Raised when PDF text extraction fails."""


class ConfigError(Paper2NoteError):
    """Raised when a required setting (API key, download path) is missing."""


class DocumentError(Paper2NoteError):
    """Raised when a vault document cannot be read, written or renamed."""


class DuplicateFileError(DocumentError):
    """Raised when creating a vault file whose path is already taken."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File already exists: {path}")


class Cancelled(Paper2NoteError):
    """Raised when the user dismisses a prompt that the command cannot proceed without."""
