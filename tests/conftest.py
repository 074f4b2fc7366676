"""Shared fixtures: scripted password input and a fast key-derivation stand-in."""

import hashlib

import pytest

from twofat.core.config import VaultConfig
from twofat.core.password import InputProvider, PasswordPrompter
from twofat.core.store import VaultStore


class ScriptedInput(InputProvider):
    """Interactive provider that answers prompts from a list."""

    interactive = True

    def __init__(self, answers):
        self.answers = [a.encode("utf-8") if isinstance(a, str) else a for a in answers]
        self.prompts = []
        self.messages = []

    def read_secret(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"unexpected prompt: {prompt!r}")
        return self.answers.pop(0)

    def message(self, text):
        self.messages.append(text)


def _fast_derive_key(password, salt, key_len=32):
    return hashlib.sha256(bytes(password) + b"|" + salt).digest()[:key_len]


@pytest.fixture
def scripted_input():
    """Factory returning a ScriptedInput for the given answers."""
    return ScriptedInput


@pytest.fixture
def fast_kdf(monkeypatch):
    """Replace Argon2id in the store with a cheap, salt-sensitive hash."""
    monkeypatch.setattr("twofat.core.store.derive_key", _fast_derive_key)
    return _fast_derive_key


@pytest.fixture
def make_store(tmp_path, scripted_input):
    """Build a VaultStore at tmp_path whose prompter answers from a list."""

    def _make(*answers, path=None):
        config = VaultConfig(path or tmp_path / "vault" / ".twofat.enc")
        provider = scripted_input(list(answers))
        return VaultStore(config, PasswordPrompter(provider))

    return _make
