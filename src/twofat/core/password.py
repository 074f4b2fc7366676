"""
Password acquisition for unlocking and creating vaults.

The input source is chosen once at startup (:func:`select_input_provider`)
and injected into :class:`PasswordPrompter`:

- :class:`TerminalInput` prompts on stderr and reads with echo disabled
- :class:`PipedInput` consumes the whole piped stream as the password
"""

from __future__ import annotations

import getpass
import hmac
import logging
import sys
from typing import BinaryIO, Optional, TextIO

from .exceptions import WrongPasswordError

logger = logging.getLogger(__name__)

PASSWORD_ATTEMPTS = 3


class InputProvider:
    """Source of password bytes."""

    interactive = False

    def read_secret(self, prompt: str) -> bytes:
        raise NotImplementedError

    def message(self, text: str) -> None:
        """Show feedback to the user; silent unless interactive."""


class TerminalInput(InputProvider):
    """Masked prompt on the controlling terminal."""

    interactive = True

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stderr

    def read_secret(self, prompt: str) -> bytes:
        return getpass.getpass(prompt, stream=self.stream).encode("utf-8")

    def message(self, text: str) -> None:
        print(text, file=self.stream)


class PipedInput(InputProvider):
    """Password taken from a non-interactive stdin; the stream is read once."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else sys.stdin.buffer
        self._consumed = False

    def read_secret(self, prompt: str) -> bytes:
        if self._consumed:
            return b""
        self._consumed = True
        data = self.stream.read()
        # a single trailing line ending comes from `echo` and is not part of the password
        if data.endswith(b"\r\n"):
            data = data[:-2]
        elif data.endswith(b"\n"):
            data = data[:-1]
        return data


def select_input_provider(stdin: Optional[TextIO] = None) -> InputProvider:
    """Pick the input variant once, based on whether stdin is a terminal."""
    stdin = stdin if stdin is not None else sys.stdin
    try:
        is_tty = stdin.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    if is_tty:
        return TerminalInput()
    return PipedInput(getattr(stdin, "buffer", stdin))


class PasswordPrompter:
    """Drives the unlock and new-password protocols over an input provider."""

    def __init__(
        self,
        provider: InputProvider,
        attempts: int = PASSWORD_ATTEMPTS,
        fallback: Optional[InputProvider] = None,
    ):
        self.provider = provider
        self.attempts = attempts
        # used by unlock() when a pipe turns out to be empty
        self._fallback = fallback

    def _terminal(self) -> InputProvider:
        if self._fallback is None:
            self._fallback = TerminalInput()
        return self._fallback

    def unlock(self) -> bytes:
        """Single acquisition attempt for an existing vault."""
        password = self.provider.read_secret("Enter datafile password: ")
        if not password and not self.provider.interactive:
            logger.debug("piped password empty; prompting on terminal")
            password = self._terminal().read_secret("Enter datafile password: ")
        return password

    def init(self) -> bytes:
        """
        Obtain a confirmed password for a new vault.

        Interactive input asks twice and allows ``attempts`` tries; empty input
        counts as a failed try. Piped input is read once and cannot be
        confirmed, so only emptiness is checked.
        """
        provider = self.provider
        if not provider.interactive:
            password = provider.read_secret("")
            if not password:
                raise WrongPasswordError("password can't be empty")
            return password

        remaining = self.attempts
        while remaining > 0:
            remaining -= 1
            password = provider.read_secret("New datafile password: ")
            if not password:
                feedback = "Password can't be empty"
            else:
                confirm = provider.read_secret("Confirm datafile password: ")
                if hmac.compare_digest(password, confirm):
                    return password
                feedback = "Passwords not the same"
            if remaining > 0:
                feedback += ", retry"
            provider.message(feedback)
        logger.info("new password not confirmed after %d attempts", self.attempts)
        raise WrongPasswordError("password not confirmed")
