"""
Data models for vault records and the unlocked in-memory database
"""

from typing import Dict, List, Optional, Union

SUPPORTED_ALGORITHMS = ("SHA1", "SHA256", "SHA512")


class Record:
    """
        Generation parameters of one stored credential
    """

    __slots__ = ('secret', 'digits', 'algorithm')

    def __init__(self, secret, digits="6", algorithm="SHA1"):
        """
            Initialize Record, validating every field
        """
        if not isinstance(secret, str) or not secret:
            raise ValueError("secret must be a non-empty string")
        # digits stays text in the stored form
        if not isinstance(digits, str) or not (digits.isascii() and digits.isdigit()):
            raise ValueError(f"digits must be a numeric string, got {digits!r}")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"unsupported algorithm {algorithm!r}")
        self.secret = secret
        self.digits = digits
        self.algorithm = algorithm

    def to_dict(self):
        return {
            'secret': self.secret,
            'digits': self.digits,
            'algorithm': self.algorithm,
        }

    @classmethod
    def from_dict(cls, data):
        """
            Create Record from dict; raises ValueError on a malformed shape
        """
        if not isinstance(data, dict) or set(data) != {'secret', 'digits', 'algorithm'}:
            raise ValueError("record must have exactly secret, digits and algorithm")
        return cls(data['secret'], data['digits'], data['algorithm'])

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return (self.secret, self.digits, self.algorithm) == (other.secret, other.digits, other.algorithm)

    def __hash__(self):
        return hash((self.secret, self.digits, self.algorithm))

    def __repr__(self):
        # never show the secret
        return f"Record(digits={self.digits!r}, algorithm={self.algorithm!r})"


class LegacyRecord:
    """
        Record shape used before 1.0.0, only ever detected, never converted
    """

    __slots__ = ('secret', 'digits')

    def __init__(self, secret, digits):
        if not isinstance(secret, str) or not secret:
            raise ValueError("secret must be a non-empty string")
        # bool is an int subclass but never a digit count
        if not isinstance(digits, int) or isinstance(digits, bool):
            raise ValueError("legacy digits must be an integer")
        self.secret = secret
        self.digits = digits

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or set(data) != {'secret', 'digits'}:
            raise ValueError("legacy record must have exactly secret and digits")
        return cls(data['secret'], data['digits'])

    def __eq__(self, other):
        if not isinstance(other, LegacyRecord):
            return NotImplemented
        return (self.secret, self.digits) == (other.secret, other.digits)

    def __hash__(self):
        return hash((self.secret, self.digits))

    def __repr__(self):
        return f"LegacyRecord(digits={self.digits!r})"


class Database:
    """
    An unlocked vault: the record set plus the password protecting it.

    The password is kept in a mutable ``bytearray`` so :meth:`lock` can
    overwrite it in place. It is never persisted.
    """

    def __init__(self, password: Union[bytes, bytearray, str], records: Optional[Dict[str, Record]] = None):
        if isinstance(password, str):
            password = password.encode("utf-8")
        self._password: Optional[bytearray] = bytearray(password)
        self.records: Dict[str, Record] = dict(records or {})

    @property
    def password(self) -> bytearray:
        """Return the in-memory password or raise if the database is locked."""
        if self._password is None:
            raise RuntimeError("Database is locked")
        return self._password

    @property
    def locked(self) -> bool:
        return self._password is None

    def set_password(self, password: Union[bytes, bytearray]) -> None:
        """Replace the password, wiping the previous one."""
        new = bytearray(password)
        self.lock()
        self._password = new

    def lock(self) -> None:
        """Zero-fill and drop the password (best-effort)."""
        try:
            if self._password is not None:
                for i in range(len(self._password)):
                    self._password[i] = 0
        finally:
            self._password = None

    def add(self, name: str, record: Record) -> None:
        if not name:
            raise ValueError("record name must not be empty")
        self.records[name] = record

    def remove(self, name: str) -> Record:
        """Remove and return the record stored under ``name``; KeyError if absent."""
        return self.records.pop(name)

    def get(self, name: str) -> Optional[Record]:
        return self.records.get(name)

    def names(self) -> List[str]:
        return sorted(self.records)

    def __len__(self):
        return len(self.records)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.lock()
        return False

    def __repr__(self):
        state = "locked" if self.locked else "unlocked"
        return f"Database({state}, records={len(self.records)})"
