"""Errors raised while preparing or running a pipeline, and their reporting."""

from __future__ import annotations

import sys
from typing import TextIO

PREFIX = "pipex: "


class PipexError(Exception):
    """A failure that ends the program with a given exit status."""

    default_code = 1

    def __init__(self, message: str | None = None, code: int | None = None) -> None:
        super().__init__(message or "")
        self.message = message
        self.code = self.default_code if code is None else code

    def __str__(self) -> str:
        return self.message or ""


class CommandNotFoundError(PipexError):
    """The command could not be found or parsed."""

    default_code = 127


class PermissionDeniedError(PipexError):
    """The command exists but cannot be executed."""

    default_code = 126


def report(error: PipexError, stream: TextIO | None = None) -> None:
    """Write the error's message to ``stream`` (stderr by default).

    Nothing is written when the error carries no message.
    """
    if not error.message:
        return
    out = sys.stderr if stream is None else stream
    out.write(f"{PREFIX}{error.message}\n")
    out.flush()