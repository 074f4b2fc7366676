"""
AES-256-GCM sealing of the serialized record set.

The vault uses one key per save: the key is derived from the password and the
save's random nonce, so a (key, nonce) pair is never reused.

Ciphertext layout returned by :func:`encrypt` is the GCM output, i.e. the
encrypted bytes followed by the 16-byte authentication tag.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


class AuthenticationFailure(Exception):
    """Decryption failed; the cause (key, nonce or tampering) is not revealed."""


def encrypt(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """Encrypt ``plaintext`` and return ciphertext with the tag appended."""
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be exactly {KEY_SIZE} bytes")
    if len(nonce) != NONCE_SIZE:
        raise ValueError(f"Nonce must be exactly {NONCE_SIZE} bytes")
    return AESGCM(key).encrypt(nonce, plaintext, None)


def decrypt(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """
    Decrypt and verify ``ciphertext``.

    Every failure, including an unusable key or a ciphertext shorter than the
    tag, raises :class:`AuthenticationFailure` and no plaintext is produced.
    """
    try:
        aead = AESGCM(key)
        return aead.decrypt(nonce, ciphertext, None)
    except (InvalidTag, ValueError, TypeError):
        raise AuthenticationFailure("authentication failed") from None
