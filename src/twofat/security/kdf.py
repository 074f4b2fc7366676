"""Argon2id key derivation for twofat vault files."""
import os
from typing import Dict, Union

from argon2.low_level import Type, hash_secret_raw

# The cost parameters are part of the on-disk format: the salt stored in a
# vault file only reproduces the key with exactly these values.
TIME_COST = 3
MEMORY_COST = 65536
PARALLELISM = 4
KEY_LEN = 32
NONCE_LEN = 12


def generate_nonce(length: int = NONCE_LEN) -> bytes:
    """Return a cryptographically secure random nonce."""
    return os.urandom(length)


def derive_key(
    password: Union[bytes, bytearray, str],
    salt: bytes,
    key_len: int = KEY_LEN,
) -> bytes:
    """
    Derive a symmetric key from a password using Argon2id.
    Returns raw derived key bytes.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")

    return hash_secret_raw(
        secret=bytes(password),
        salt=salt,
        time_cost=TIME_COST,
        memory_cost=MEMORY_COST,
        parallelism=PARALLELISM,
        hash_len=key_len,
        type=Type.ID,
    )


def kdf_params_to_dict(salt: bytes) -> Dict:
    return {
        "algo": "argon2id",
        "salt": salt.hex(),
        "time": TIME_COST,
        "memory": MEMORY_COST,
        "parallelism": PARALLELISM,
        "key_len": KEY_LEN,
    }
