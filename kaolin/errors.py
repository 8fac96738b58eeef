from __future__ import annotations

import enum


class DocumentError(Exception):
    pass


class OutOfRange(DocumentError):
    pass


class NoFileName(DocumentError):
    pass


class ReadOnlyFile(DocumentError):
    pass


class IoError(DocumentError):
    pass


class Status(enum.Enum):
    NONE = enum.auto()
    START_OF_FILE = enum.auto()
    END_OF_FILE = enum.auto()
    START_OF_LINE = enum.auto()
    END_OF_LINE = enum.auto()
