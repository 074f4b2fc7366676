"""Core vault logic: records, serialization, password acquisition and the store."""

from .config import VaultConfig
from .exceptions import (
    ErrorKind,
    TwofatError,
    InsufficientDataError,
    WrongPasswordError,
    InvalidEntriesError,
    LegacyFormatError,
    VaultIOError,
)
from .models import Database, LegacyRecord, Record
from .password import PasswordPrompter, PipedInput, TerminalInput, select_input_provider
from .store import VaultStore

__all__ = [
    "VaultConfig",
    "ErrorKind",
    "TwofatError",
    "InsufficientDataError",
    "WrongPasswordError",
    "InvalidEntriesError",
    "LegacyFormatError",
    "VaultIOError",
    "Database",
    "LegacyRecord",
    "Record",
    "PasswordPrompter",
    "PipedInput",
    "TerminalInput",
    "select_input_provider",
    "VaultStore",
]
