"""Errors raised while reading, parsing or modelling the analyzed sources."""

from pathlib import Path

from .base import ArtieLensError


class AnalysisError(ArtieLensError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class ProgramBuildError(AnalysisError):
    """Raised when a program model cannot be built from the given files."""

    def __init__(self, reason: str, config_path: Path):
        super().__init__(
            "Failed to create project program",
            details={"config": str(config_path), "reason": reason},
        )
        self.reason = reason
        self.config_path = config_path
