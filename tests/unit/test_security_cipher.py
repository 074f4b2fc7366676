"""Unit tests for AES-256-GCM sealing of vault payloads."""

import os

import pytest
from twofat.security.cipher import (
    AuthenticationFailure,
    NONCE_SIZE,
    TAG_SIZE,
    decrypt,
    encrypt,
)


@pytest.fixture
def key():
    return os.urandom(32)


@pytest.fixture
def nonce():
    return os.urandom(NONCE_SIZE)


def test_encrypt_decrypt_roundtrip(key, nonce):
    ct = encrypt(key, nonce, b"hello world")
    assert len(ct) == len(b"hello world") + TAG_SIZE
    assert decrypt(key, nonce, ct) == b"hello world"


def test_decrypt_wrong_key_fails(key, nonce):
    ct = encrypt(key, nonce, b"secret")
    with pytest.raises(AuthenticationFailure):
        decrypt(os.urandom(32), nonce, ct)


def test_decrypt_tampered_ciphertext_fails(key, nonce):
    ct = bytearray(encrypt(key, nonce, b"secret"))
    ct[0] ^= 1
    with pytest.raises(AuthenticationFailure):
        decrypt(key, nonce, bytes(ct))


def test_decrypt_tampered_tag_fails(key, nonce):
    ct = bytearray(encrypt(key, nonce, b"secret"))
    ct[-1] ^= 0x80
    with pytest.raises(AuthenticationFailure):
        decrypt(key, nonce, bytes(ct))


def test_decrypt_wrong_nonce_fails(key, nonce):
    ct = encrypt(key, nonce, b"secret")
    with pytest.raises(AuthenticationFailure):
        decrypt(key, os.urandom(NONCE_SIZE), ct)


def test_decrypt_bad_key_size_is_authentication_failure(nonce):
    """A key the cipher cannot be built from is indistinguishable from a wrong key."""
    with pytest.raises(AuthenticationFailure):
        decrypt(b"short", nonce, b"x" * 32)


def test_decrypt_truncated_ciphertext_fails(key, nonce):
    with pytest.raises(AuthenticationFailure):
        decrypt(key, nonce, b"\x00" * 4)


def test_encrypt_rejects_bad_sizes(key, nonce):
    with pytest.raises(ValueError, match="Key must be"):
        encrypt(b"short", nonce, b"data")
    with pytest.raises(ValueError, match="Nonce must be"):
        encrypt(key, b"short", b"data")


def test_authentication_failure_hides_cause(key, nonce):
    ct = encrypt(key, nonce, b"secret")
    with pytest.raises(AuthenticationFailure) as excinfo:
        decrypt(os.urandom(32), nonce, ct)
    assert excinfo.value.__cause__ is None
    assert str(excinfo.value) == "authentication failed"
