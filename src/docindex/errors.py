"""Exceptions raised by the indexing and assembly engine."""

from __future__ import annotations


class DocIndexError(Exception):
    """Base class for all docindex errors."""


class EmptyInput(DocIndexError):
    def __init__(self, message: str = "No documents to index") -> None:
        super().__init__(message)


class UnsupportedFormat(DocIndexError):
    def __init__(self, format_name: str) -> None:
        self.format_name = format_name
        super().__init__(f"Unsupported export format: {format_name}")


class InvalidIndexType(DocIndexError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unsupported index type: {value}")


class InvalidScheme(DocIndexError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unsupported numbering scheme: {value}")


class DuplicateFile(DocIndexError):
    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"File already merged into the index: {file_name}")
