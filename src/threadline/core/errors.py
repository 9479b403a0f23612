"""Domain exceptions raised below the HTTP layer.

Endpoints translate these into `HTTPException` responses; nothing in the
repositories or services knows about status codes.
"""


class ThreadlineError(RuntimeError):
    """Base exception for Threadline failures."""


class StorageError(ThreadlineError):
    """Raised when the relational store fails to execute an operation.

    Covers connectivity problems and constraint violations that are not
    otherwise classified. Details are logged server-side only.
    """


class IdentityResolutionError(StorageError):
    """Raised when an external identifier cannot be mapped to an internal key."""


class DependencyNotFoundError(ThreadlineError):
    """Raised when a referenced row (e.g. the post being replied to) does not exist."""

    def __init__(self, entity: str, key: int) -> None:
        super().__init__(f"{entity} {key} not found")
        self.entity = entity
        self.key = key


class SummarizerError(ThreadlineError):
    """Raised when the summarization provider cannot produce an answer."""
