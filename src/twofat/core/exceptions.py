"""
Exceptions for twofat core module
Every error carries an ErrorKind so callers branch on the kind, not on identity
"""

from enum import Enum


class ErrorKind(Enum):
    INSUFFICIENT_DATA = "insufficient_data"
    WRONG_PASSWORD = "wrong_password"
    INVALID_ENTRIES = "invalid_entries"
    LEGACY_FORMAT = "legacy_format"
    IO_ERROR = "io_error"


class TwofatError(Exception):
    # general container for errors
    kind: ErrorKind = ErrorKind.IO_ERROR


class InsufficientDataError(TwofatError):
    # raised when the vault file is too short to hold a nonce and ciphertext
    kind = ErrorKind.INSUFFICIENT_DATA


class WrongPasswordError(TwofatError):
    # raised on any unlock failure, or when new-password confirmation runs out
    kind = ErrorKind.WRONG_PASSWORD


class InvalidEntriesError(TwofatError):
    # raised when decrypted data matches neither schema
    kind = ErrorKind.INVALID_ENTRIES


class LegacyFormatError(TwofatError):
    # raised when decrypted data is in the pre-1.0.0 schema
    kind = ErrorKind.LEGACY_FORMAT


class VaultIOError(TwofatError):
    # raised when reading, writing or creating vault files fails
    kind = ErrorKind.IO_ERROR


_EXIT_CODES = {
    ErrorKind.LEGACY_FORMAT: 1,
    ErrorKind.WRONG_PASSWORD: 2,
    ErrorKind.INSUFFICIENT_DATA: 3,
    ErrorKind.INVALID_ENTRIES: 4,
    ErrorKind.IO_ERROR: 5,
}


def error_exit_code(kind: ErrorKind) -> int:
    """Process exit status for an error kind."""
    return _EXIT_CODES[kind]
