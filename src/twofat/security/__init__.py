"""Security helpers: key derivation and authenticated encryption for twofat.

This package provides:
- Argon2id-based key derivation with fixed, format-bound cost parameters
- AES-256-GCM encryption/decryption of the serialized record set
"""

from .kdf import generate_nonce, derive_key, kdf_params_to_dict
from .cipher import AuthenticationFailure, encrypt, decrypt

__all__ = [
    "generate_nonce",
    "derive_key",
    "kdf_params_to_dict",
    "AuthenticationFailure",
    "encrypt",
    "decrypt",
]
