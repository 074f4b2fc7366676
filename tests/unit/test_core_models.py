"""Unit tests for Record, LegacyRecord and Database."""

import pytest
from twofat.core.models import Database, LegacyRecord, Record


# ==============================================================================
# Record
# ==============================================================================

def test_record_defaults():
    rec = Record("JBSWY3DPEHPK3PXP")
    assert rec.digits == "6"
    assert rec.algorithm == "SHA1"


def test_record_to_from_dict():
    rec = Record("JBSWY3DPEHPK3PXP", "8", "SHA256")
    assert rec.to_dict() == {"secret": "JBSWY3DPEHPK3PXP", "digits": "8", "algorithm": "SHA256"}
    assert Record.from_dict(rec.to_dict()) == rec


@pytest.mark.parametrize(
    "secret,digits,algorithm",
    [
        ("", "6", "SHA1"),
        ("S", 6, "SHA1"),
        ("S", "six", "SHA1"),
        ("S", "", "SHA1"),
        ("S", "6", "MD5"),
    ],
)
def test_record_rejects_invalid_fields(secret, digits, algorithm):
    with pytest.raises(ValueError):
        Record(secret, digits, algorithm)


def test_record_from_dict_requires_exact_keys():
    with pytest.raises(ValueError):
        Record.from_dict({"secret": "S", "digits": "6"})
    with pytest.raises(ValueError):
        Record.from_dict({"secret": "S", "digits": "6", "algorithm": "SHA1", "extra": 1})
    with pytest.raises(ValueError):
        Record.from_dict(["S", "6", "SHA1"])


def test_record_repr_hides_secret():
    assert "JBSWY3DP" not in repr(Record("JBSWY3DPEHPK3PXP"))


# ==============================================================================
# LegacyRecord
# ==============================================================================

def test_legacy_record_from_dict():
    rec = LegacyRecord.from_dict({"secret": "S", "digits": 6})
    assert rec == LegacyRecord("S", 6)


def test_legacy_record_rejects_string_digits():
    with pytest.raises(ValueError):
        LegacyRecord.from_dict({"secret": "S", "digits": "6"})


def test_legacy_record_rejects_bool_digits():
    with pytest.raises(ValueError):
        LegacyRecord("S", True)


# ==============================================================================
# Database
# ==============================================================================

def test_database_password_is_bytearray():
    db = Database("pw")
    assert db.password == bytearray(b"pw")
    assert isinstance(db.password, bytearray)


def test_database_lock_zeroes_password():
    db = Database(b"secret-pw")
    buf = db.password
    db.lock()
    assert db.locked
    assert buf == bytearray(len(b"secret-pw"))
    with pytest.raises(RuntimeError, match="locked"):
        _ = db.password


def test_database_lock_is_idempotent():
    db = Database(b"pw")
    db.lock()
    db.lock()
    assert db.locked


def test_database_context_manager_locks():
    with Database(b"pw") as db:
        assert not db.locked
    assert db.locked


def test_database_set_password_wipes_old():
    db = Database(b"old")
    old = db.password
    db.set_password(b"new")
    assert old == bytearray(3)
    assert db.password == bytearray(b"new")


def test_database_record_helpers():
    db = Database(b"pw")
    db.add("gitlab", Record("A"))
    db.add("github", Record("B"))
    assert db.names() == ["github", "gitlab"]
    assert len(db) == 2
    assert db.get("github") == Record("B")
    assert db.get("missing") is None
    assert db.remove("gitlab") == Record("A")
    with pytest.raises(KeyError):
        db.remove("gitlab")


def test_database_add_rejects_empty_name():
    with pytest.raises(ValueError):
        Database(b"pw").add("", Record("A"))


def test_database_repr_hides_password():
    db = Database(b"hunter2")
    assert "hunter2" not in repr(db)
