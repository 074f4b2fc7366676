"""
Encrypted vault store.

Vault file layout:
==============================
 - byte[12]  nonce        (random per save, also the Argon2id salt)
 - byte[N]   ciphertext   (AES-256-GCM output, 16-byte tag appended)
==============================

The nonce doubles as the key-derivation salt. Every save draws a fresh
nonce, so every save also encrypts under a fresh key.

:class:`VaultStore` is the only place that touches the vault file. It either
unlocks an existing vault or initializes a new one, and rewrites the file
atomically (temporary file in the same directory, then ``os.replace``).
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from twofat.security.cipher import AuthenticationFailure, NONCE_SIZE, decrypt, encrypt
from twofat.security.kdf import derive_key, generate_nonce, kdf_params_to_dict

from .config import VaultConfig
from .exceptions import InsufficientDataError, VaultIOError, WrongPasswordError
from .models import Database
from .password import PasswordPrompter
from .serializer import decode_records, encode

logger = logging.getLogger(__name__)

FILE_MODE = 0o600
DIR_MODE = 0o700


class VaultStore:
    """Load, initialize and save the encrypted vault at ``config.vault_path``."""

    def __init__(self, config: VaultConfig, prompter: PasswordPrompter):
        self.config = config
        self.prompter = prompter

    @property
    def path(self) -> Path:
        return self.config.vault_path

    def exists(self) -> bool:
        try:
            return self.path.exists()
        except OSError as exc:
            raise VaultIOError(f"could not stat {self.path}: {exc}") from exc

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self) -> Database:
        """
        Unlock the vault, or create it if the file does not exist yet.

        Raises:
            InsufficientDataError: file shorter than nonce + 1 byte
            WrongPasswordError: decryption failed for any reason
            LegacyFormatError: file holds the pre-1.0.0 schema
            InvalidEntriesError: plaintext matches neither schema
            VaultIOError: the file could not be read
        """
        if not self.exists():
            return self.initialize_new()

        try:
            blob = self.path.read_bytes()
        except OSError as exc:
            raise VaultIOError(f"could not read {self.path}: {exc}") from exc

        if len(blob) < NONCE_SIZE + 1:
            raise InsufficientDataError(f"insufficient data in {self.path}")

        nonce, ciphertext = blob[:NONCE_SIZE], blob[NONCE_SIZE:]
        password = bytearray(self.prompter.unlock())
        db = Database(password)
        try:
            plaintext = self._open(db.password, nonce, ciphertext)
            db.records = decode_records(plaintext)
        except BaseException:
            db.lock()
            raise
        finally:
            for i in range(len(password)):
                password[i] = 0

        logger.info("unlocked %s (%d records)", self.path, len(db))
        return db

    def _open(self, password: bytearray, nonce: bytes, ciphertext: bytes) -> bytes:
        key = derive_key(password, nonce)
        try:
            return decrypt(key, nonce, ciphertext)
        except AuthenticationFailure:
            # one error for every cause; do not tell the caller which step failed
            raise WrongPasswordError("password error") from None

    # ------------------------------------------------------------------
    # Initialize
    # ------------------------------------------------------------------

    def initialize_new(self) -> Database:
        """Create a new, empty vault protected by a freshly confirmed password."""
        self._ensure_dir()
        logger.info("initializing datafile %s", self.path)
        password = self.prompter.init()
        db = Database(password, {})
        try:
            self.save(db)
        except BaseException:
            db.lock()
            raise
        return db

    def _ensure_dir(self) -> None:
        vault_dir = self.config.vault_dir
        # every missing level gets DIR_MODE, not only the last one
        try:
            missing = [d for d in (vault_dir, *vault_dir.parents) if not d.exists()]
            for directory in reversed(missing):
                directory.mkdir(mode=DIR_MODE, exist_ok=True)
        except OSError as exc:
            raise VaultIOError(f"could not create {self.config.vault_dir}: {exc}") from exc

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, db: Database) -> bytes:
        """
        Encrypt ``db.records`` under ``db.password`` and rewrite the vault.

        Returns the nonce used for this save.
        """
        nonce = generate_nonce(NONCE_SIZE)
        key = derive_key(db.password, nonce)
        ciphertext = encrypt(key, nonce, encode(db.records))
        self._write_atomic(nonce + ciphertext)
        logger.debug("saved %d records to %s", len(db), self.path)
        return nonce

    def _write_atomic(self, data: bytes) -> None:
        self._ensure_dir()
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.config.vault_dir), prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise VaultIOError(f"datafile write error: {exc}") from exc

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                os.chmod(tmp_name, FILE_MODE)
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise VaultIOError(f"datafile write error: {exc}") from exc

    # ------------------------------------------------------------------
    # Password change and diagnostics
    # ------------------------------------------------------------------

    def change_password(self, db: Database) -> None:
        """Re-encrypt the whole record set under a newly confirmed password."""
        new_password = self.prompter.init()
        previous = bytearray(db.password)
        db.set_password(new_password)
        try:
            self.save(db)
        except BaseException:
            db.set_password(previous)
            raise
        finally:
            for i in range(len(previous)):
                previous[i] = 0
        logger.info("password changed for %s", self.path)

    def describe(self) -> Dict[str, Any]:
        """Report what is known about the vault without unlocking it."""
        info: Dict[str, Any] = {"path": str(self.path), "exists": self.exists()}
        if not info["exists"]:
            return info
        try:
            blob = self.path.read_bytes()
            mode = self.path.stat().st_mode & 0o777
        except OSError as exc:
            raise VaultIOError(f"could not read {self.path}: {exc}") from exc
        info["size"] = len(blob)
        info["mode"] = oct(mode)
        if len(blob) >= NONCE_SIZE + 1:
            info["kdf"] = kdf_params_to_dict(blob[:NONCE_SIZE])
        return info
