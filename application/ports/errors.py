"""
Errors raised by repository implementations (adapters).

Read paths degrade to empty results instead of raising; only writes that
could not be persisted raise RepositoryError, so use cases can report the
failure instead of pretending the data was saved.
"""


class RepositoryError(Exception):
    """Raised when a repository write fails."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.message = message
        self.operation = operation
