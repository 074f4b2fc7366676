"""Command-line entry point for the twofat vault.

Usage:

    twofat check            unlock (or create) the vault and report its size
    twofat passwd           re-encrypt the vault under a new password
    twofat info             show file facts and KDF parameters without unlocking

Error kinds map to distinct non-zero exit codes; see
:func:`twofat.core.exceptions.error_exit_code`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from twofat import __version__
from twofat.core.exceptions import ErrorKind, TwofatError, error_exit_code

from .context import AppContext, build_context
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

LEGACY_HINT = (
    "Export the contents of this old datafile with 'twofat' version below 1.0.0\n"
    "and import the exported data with twofat v1.0.0 or later."
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twofat", description="Encrypted secret vault")
    parser.add_argument("--vault", metavar="PATH", help="vault file (default: ~/.twofat.enc)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more log output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("check", help="unlock or initialize the vault and report record count")
    sub.add_parser("passwd", help="change the vault password")
    sub.add_parser("info", help="show vault file facts without unlocking")
    return parser


def _cmd_check(ctx: AppContext) -> int:
    if not ctx.redirected:
        print(f"Datafile: {ctx.config.vault_path}", file=sys.stderr)
    with ctx.store.load() as db:
        print(f"{len(db)} entries")
    return 0


def _cmd_passwd(ctx: AppContext) -> int:
    with ctx.store.load() as db:
        ctx.store.change_password(db)
    print("Password changed", file=sys.stderr)
    return 0


def _cmd_info(ctx: AppContext) -> int:
    info = ctx.store.describe()
    for key, value in info.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                print(f"{key}.{sub_key}: {sub_value}")
        else:
            print(f"{key}: {value}")
    return 0


_COMMANDS = {
    "check": _cmd_check,
    "passwd": _cmd_passwd,
    "info": _cmd_info,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    configure_logging(level)

    ctx = build_context(vault_path=args.vault)
    command = _COMMANDS[args.command or "check"]
    try:
        return command(ctx)
    except TwofatError as exc:
        if exc.kind is ErrorKind.LEGACY_FORMAT:
            print(LEGACY_HINT, file=sys.stderr)
        else:
            print(f"Error: {exc}", file=sys.stderr)
        logger.debug("command failed", exc_info=True)
        return error_exit_code(exc.kind)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
