"""
Failure taxonomy for document decoding.

Decoders raise DocumentError subclasses; the engine converts them into a
tagged ParseFailure so no exception crosses its public boundary.
"""

from enum import Enum


class ParseErrorKind(str, Enum):
    UNSUPPORTED_FORMAT = "unsupported_format"
    FILE_NOT_FOUND = "file_not_found"
    CORRUPT_DOCUMENT = "corrupt_document"


class DocumentError(Exception):
    """Base class for decoder-level failures."""
    kind: ParseErrorKind = ParseErrorKind.CORRUPT_DOCUMENT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormatError(DocumentError):
    kind = ParseErrorKind.UNSUPPORTED_FORMAT


class DocumentNotFoundError(DocumentError):
    kind = ParseErrorKind.FILE_NOT_FOUND


class CorruptDocumentError(DocumentError):
    kind = ParseErrorKind.CORRUPT_DOCUMENT
