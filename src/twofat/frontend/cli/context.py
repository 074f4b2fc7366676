"""Small helper to build the twofat runtime context for the command line."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from twofat.core.config import VaultConfig
from twofat.core.password import PasswordPrompter, select_input_provider
from twofat.core.store import VaultStore


@dataclass
class AppContext:
    """Container for runtime objects the command line needs."""

    config: VaultConfig
    store: VaultStore
    prompter: PasswordPrompter

    @property
    def redirected(self) -> bool:
        # True when the password comes from a pipe rather than a terminal
        return not self.prompter.provider.interactive


def build_context(
    vault_path: Optional[str | Path] = None,
    stdin: Optional[TextIO] = None,
    argv0: Optional[str] = None,
) -> AppContext:
    """
    Build config, input provider and store once at startup.

    The vault path defaults to ``~/.<program>.enc``; the input provider is
    chosen from whether ``stdin`` is a terminal.
    """
    config = VaultConfig.from_process(argv0=argv0, vault_path=vault_path)
    prompter = PasswordPrompter(select_input_provider(stdin))
    store = VaultStore(config, prompter)
    return AppContext(config=config, store=store, prompter=prompter)
