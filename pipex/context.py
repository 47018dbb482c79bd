"""Run-time state of a pipeline: file paths, commands and open descriptors."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from pipex.errors import PipexError
from pipex.pathsearch import DEFAULT_PATH

DEFAULT_ENV: Mapping[str, str] = {"PATH": DEFAULT_PATH}
OUTFILE_MODE = 0o644


def _close_fd(fd: int) -> None:
    """Close ``fd`` unless it is a standard stream or unset."""
    if fd > 2:
        try:
            os.close(fd)
        except OSError:
            pass


@dataclass
class PipexContext:
    """State for the two-command pipeline ``< infile cmd1 | cmd2 > outfile``."""

    infile_path: str
    first_cmd: str
    second_cmd: str
    outfile_path: str
    env: Mapping[str, str]
    in_fd: int = -1
    out_fd: int = -1
    ends: tuple[int, int] = (-1, -1)
    cleaned: bool = False

    @property
    def commands(self) -> list[str]:
        """The command strings in pipeline order."""
        return [self.first_cmd, self.second_cmd]

    def close(self) -> None:
        """Close every descriptor the context owns; later calls do nothing."""
        if self.cleaned:
            return
        self.cleaned = True
        _close_fd(self.in_fd)
        _close_fd(self.out_fd)
        for fd in self.ends:
            _close_fd(fd)

    def __enter__(self) -> PipexContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def init_context(argv: Sequence[str], env: Mapping[str, str] | None) -> PipexContext:
    """Build the context from ``[program, infile, cmd1, cmd2, outfile]``.

    Without an environment a default one holding only a PATH is used.
    """
    if len(argv) < 5:
        raise ValueError("expected program, infile, cmd1, cmd2 and outfile")
    return PipexContext(
        infile_path=argv[1],
        first_cmd=argv[2],
        second_cmd=argv[3],
        outfile_path=argv[4],
        env=dict(DEFAULT_ENV) if env is None else env,
    )


@dataclass
class BonusContext:
    """State for a pipeline of any number of commands, optionally fed by a here-document."""

    outfile_path: str
    commands: list[str]
    env: Mapping[str, str] | None
    infile_path: str | None = None
    is_heredoc: bool = False
    limiter: str | None = None
    in_fd: int = -1
    out_fd: int = -1
    pipes: list[tuple[int, int]] = field(default_factory=list)
    input_missing: bool = False
    cleaned: bool = False

    @property
    def cmd_count(self) -> int:
        return len(self.commands)

    @property
    def pipe_count(self) -> int:
        return max(self.cmd_count - 1, 0)

    def close_pipes(self) -> None:
        """Close both ends of every pipe between commands."""
        for read_end, write_end in self.pipes:
            _close_fd(read_end)
            _close_fd(write_end)

    def close(self) -> None:
        """Close every descriptor the context owns; later calls do nothing."""
        if self.cleaned:
            return
        self.cleaned = True
        _close_fd(self.in_fd)
        _close_fd(self.out_fd)
        self.close_pipes()

    def __enter__(self) -> BonusContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _open_pipes(context: BonusContext) -> None:
    for _ in range(context.pipe_count):
        try:
            context.pipes.append(os.pipe())
        except OSError as exc:
            context.close_pipes()
            context.pipes.clear()
            raise PipexError("pipe failed", 1) from exc


def _open_files(context: BonusContext) -> None:
    path = context.infile_path or ""
    try:
        context.in_fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        context.input_missing = True
        context.close()
        raise PipexError(f"no such file or directory: {path}", 0) from exc
    try:
        context.out_fd = os.open(
            context.outfile_path,
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
            OUTFILE_MODE,
        )
    except OSError as exc:
        context.close()
        raise PipexError(f"{context.outfile_path}: {exc.strerror}", 1) from exc


def init_bonus_context(
    argv: Sequence[str], env: Mapping[str, str] | None
) -> BonusContext:
    """Build the context from ``[program, infile, cmd1, ..., cmdn, outfile]``.

    Creates the pipes between commands, opens the input file and truncates
    the output file. A missing input file raises PipexError with status 0.
    """
    if len(argv) < 5:
        raise ValueError("expected program, infile, at least two commands and outfile")
    context = BonusContext(
        infile_path=argv[1],
        outfile_path=argv[-1],
        commands=list(argv[2:-1]),
        env=env,
    )
    _open_pipes(context)
    _open_files(context)
    return context


def init_heredoc_context(
    argv: Sequence[str], env: Mapping[str, str] | None
) -> BonusContext:
    """Build the context from ``[program, "here_doc", LIMITER, cmd1, ..., outfile]``.

    Only the pipes between commands are created; the input and output
    descriptors are set up when the here-document is read.
    """
    if len(argv) < 6:
        raise ValueError("expected program, here_doc, limiter, two commands and outfile")
    context = BonusContext(
        outfile_path=argv[-1],
        commands=list(argv[3:-1]),
        env=env,
        is_heredoc=True,
        limiter=argv[2],
    )
    _open_pipes(context)
    return context