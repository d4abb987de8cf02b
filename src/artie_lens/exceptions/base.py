"""Root of the artie-lens exception hierarchy."""

from typing import Mapping, Optional


class ArtieLensError(Exception):
    """Every error artie-lens raises on purpose.

    The CLI prints ``str(error)`` for these and exits with status 1; any other
    exception is a bug and keeps its traceback.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({extra})"
