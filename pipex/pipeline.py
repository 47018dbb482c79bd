"""Start the commands of a pipeline, connect them and collect their status."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Callable, Mapping

from pipex.context import OUTFILE_MODE, BonusContext, PipexContext
from pipex.errors import (
    CommandNotFoundError,
    PermissionDeniedError,
    PipexError,
    report,
)
from pipex.pathsearch import Command, resolve_command, resolve_command_bonus

# A started stage is either a running process or the status it already ended with.
_Stage = "subprocess.Popen[bytes] | int"


def status_to_exit_code(returncode: int) -> int:
    """Map a process return code to a shell exit status.

    A process killed by a signal (negative return code) gives 128 plus the
    signal number; otherwise the return code is the status.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def _exec_env(env: Mapping[str, str] | None) -> dict[str, str]:
    return {} if env is None else dict(env)


def _fd_or_devnull(fd: int) -> int:
    return fd if fd >= 0 else subprocess.DEVNULL


def _spawn(
    command: Command, stdin: int, stdout: int, env: dict[str, str]
) -> subprocess.Popen[bytes]:
    return subprocess.Popen(
        command.argv,
        executable=command.path,
        stdin=stdin,
        stdout=stdout,
        env=env,
        close_fds=True,
    )


def _start(
    cmd_str: str,
    env: Mapping[str, str] | None,
    stdin: int,
    stdout: int,
    resolve: Callable[[str, Mapping[str, str] | None], Command],
    on_exec_failure: Callable[[Command], PipexError],
) -> subprocess.Popen[bytes] | int:
    """Resolve and start one command; report failures and return their status."""
    try:
        command = resolve(cmd_str, env)
    except PipexError as error:
        report(error)
        return error.code
    try:
        return _spawn(command, stdin, stdout, _exec_env(env))
    except OSError:
        error = on_exec_failure(command)
        report(error)
        return error.code


def _wait(stage: subprocess.Popen[bytes] | int) -> int:
    if isinstance(stage, int):
        return stage
    return status_to_exit_code(stage.wait())


def _permission_denied(command: Command) -> PipexError:
    return PermissionDeniedError(f"{command.name}: permission denied")


def _bonus_exec_failure(command: Command) -> PipexError:
    if "/" in command.name:
        return PermissionDeniedError("command execution failed")
    return CommandNotFoundError("command not found")


def _truncate_outfile(path: str) -> None:
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OUTFILE_MODE)
    except OSError:
        return
    os.close(fd)


def _first_stage(
    context: PipexContext, write_end: int
) -> subprocess.Popen[bytes] | int:
    """Run the first command with the input file as stdin and the pipe as stdout."""
    try:
        in_fd = os.open(context.infile_path, os.O_RDONLY)
    except OSError:
        report(PipexError(f"No such file or directory: {context.infile_path}", 0))
        _truncate_outfile(context.outfile_path)
        return 0
    context.in_fd = in_fd
    try:
        return _start(
            context.first_cmd,
            context.env,
            in_fd,
            write_end,
            resolve_command,
            _permission_denied,
        )
    finally:
        os.close(in_fd)
        context.in_fd = -1


def _second_stage(
    context: PipexContext, read_end: int
) -> subprocess.Popen[bytes] | int:
    """Run the second command with the pipe as stdin and the output file as stdout."""
    try:
        out_fd = os.open(
            context.outfile_path,
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
            OUTFILE_MODE,
        )
    except OSError as exc:
        report(PipexError(f"{context.outfile_path}: {exc.strerror}", 1))
        return 1
    context.out_fd = out_fd
    try:
        return _start(
            context.second_cmd,
            context.env,
            read_end,
            out_fd,
            resolve_command,
            _permission_denied,
        )
    finally:
        os.close(out_fd)
        context.out_fd = -1


def run_two(context: PipexContext) -> int:
    """Run ``< infile cmd1 | cmd2 > outfile`` and return the second command's status.

    Raises PipexError with status 2 when the pipe cannot be created.
    """
    try:
        read_end, write_end = os.pipe()
    except OSError as exc:
        raise PipexError("pipe creation failed", 2) from exc
    context.ends = (read_end, write_end)
    try:
        first = _first_stage(context, write_end)
        second = _second_stage(context, read_end)
    finally:
        os.close(read_end)
        os.close(write_end)
        context.ends = (-1, -1)
    _wait(first)
    return _wait(second)


def run_many(context: BonusContext) -> int:
    """Run every command of ``context`` connected by its pipes.

    Returns the status of the last command, or 1 when the input was missing
    and the last command succeeded.
    """
    if not context.commands:
        raise ValueError("a pipeline needs at least one command")
    if len(context.pipes) < context.pipe_count:
        raise ValueError("the context does not hold a pipe between every command")
    last = context.cmd_count - 1
    stages: list[subprocess.Popen[bytes] | int] = []
    try:
        for index, cmd_str in enumerate(context.commands):
            stdin = (
                _fd_or_devnull(context.in_fd)
                if index == 0
                else context.pipes[index - 1][0]
            )
            stdout = (
                _fd_or_devnull(context.out_fd)
                if index == last
                else context.pipes[index][1]
            )
            stages.append(
                _start(
                    cmd_str,
                    context.env,
                    stdin,
                    stdout,
                    resolve_command_bonus,
                    _bonus_exec_failure,
                )
            )
    finally:
        context.close_pipes()
        context.pipes.clear()
    statuses = [_wait(stage) for stage in stages]
    last_status = statuses[-1]
    if context.input_missing and last_status == 0:
        return 1
    return last_status