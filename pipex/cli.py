"""Command-line entry points for the two-command and multi-command pipelines."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from pipex.context import init_bonus_context, init_context, init_heredoc_context
from pipex.errors import PipexError, report
from pipex.heredoc import handle_heredoc
from pipex.pipeline import run_many, run_two

USAGE = "Usage: ./pipex infile cmd1 cmd2 outfile\n"
BONUS_USAGE = (
    "Usage: ./pipex file1 cmd1 cmd2 ... cmdn file2\n"
    "   or: ./pipex here_doc LIMITER cmd1 cmd2 file\n"
)
HEREDOC_USAGE = "Usage for here_doc: ./pipex here_doc LIMITER cmd1 cmd2 file\n"
HEREDOC_KEYWORD = "here_doc"


def _arguments(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv if argv is None else argv)


def _usage(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``< infile cmd1 | cmd2 > outfile``.

    ``argv`` holds the program name followed by its four arguments. Returns
    the exit status of the second command, or 1 on a usage error.
    """
    args = _arguments(argv)
    if len(args) != 5:
        _usage(USAGE)
        return 1
    context = init_context(args, dict(os.environ))
    try:
        return run_two(context)
    except PipexError as error:
        report(error)
        return error.code
    finally:
        context.close()


def _run_heredoc(args: list[str]) -> int:
    if len(args) < 6:
        _usage(HEREDOC_USAGE)
        return 0
    try:
        context = init_heredoc_context(args, dict(os.environ))
    except PipexError:
        return 0
    try:
        handle_heredoc(context)
        return run_many(context)
    except PipexError as error:
        report(error)
        return error.code
    finally:
        context.close()


def main_bonus(argv: Sequence[str] | None = None) -> int:
    """Run a pipeline of any number of commands.

    ``argv`` is either ``[program, infile, cmd1, ..., cmdn, outfile]`` or
    ``[program, "here_doc", LIMITER, cmd1, ..., cmdn, outfile]``. Returns the
    exit status of the last command; usage errors give status 0.
    """
    args = _arguments(argv)
    if len(args) < 5:
        _usage(BONUS_USAGE)
        return 0
    if args[1].startswith(HEREDOC_KEYWORD):
        return _run_heredoc(args)
    try:
        context = init_bonus_context(args, dict(os.environ))
    except PipexError as error:
        report(error)
        return error.code
    try:
        return run_many(context)
    except PipexError as error:
        report(error)
        return error.code
    finally:
        context.close()