"""Vault configuration, built once at startup and passed into the store."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_PROGRAM = "twofat"
VAULT_SUFFIX = ".enc"


@dataclass(frozen=True)
class VaultConfig:
    """Where the vault file lives."""

    vault_path: Path

    @classmethod
    def from_process(
        cls,
        argv0: Optional[str] = None,
        home: Optional[str | Path] = None,
        vault_path: Optional[str | Path] = None,
    ) -> "VaultConfig":
        """
        Build the config for this process.

        An explicit ``vault_path`` wins. Otherwise the vault is the dotfile
        ``~/.<program>.enc`` where ``<program>`` is the basename of ``argv0``.
        """
        if vault_path is not None:
            return cls(Path(vault_path).expanduser())

        program = os.path.basename(argv0 if argv0 is not None else sys.argv[0])
        if not program:
            program = DEFAULT_PROGRAM
        home_dir = Path(home) if home is not None else Path.home()
        return cls(home_dir / f".{program}{VAULT_SUFFIX}")

    @property
    def vault_dir(self) -> Path:
        return self.vault_path.parent
