"""twofat: a password-protected, encrypted-at-rest store of one-time-code secrets."""

__version__ = "1.0.0"
