"""Locate the executable behind a command string."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from pipex.errors import CommandNotFoundError, PermissionDeniedError
from pipex.tokenizer import shell_split

DEFAULT_PATH = "/bin:/usr/bin:/usr/local/bin"


@dataclass(frozen=True)
class Command:
    """A resolved executable together with the argument list to run it with."""

    path: str
    argv: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        """The command name as the user wrote it."""
        return self.argv[0] if self.argv else self.path


def find_path_env(env: Mapping[str, str] | None) -> str | None:
    """Return the value of PATH in ``env``, or None if there is none."""
    if env is None:
        return None
    return env.get("PATH")


def split_path_dirs(path_env: str | None) -> list[str] | None:
    """Split a PATH value on ``:``, dropping empty entries."""
    if path_env is None:
        return None
    return [directory for directory in path_env.split(":") if directory]


def check_direct_command(cmd: str) -> str | None:
    """Check a command given with a slash in it.

    Returns ``cmd`` when it names an executable file and None when it has no
    slash. Raises PermissionDeniedError when the file exists but is not
    executable, and CommandNotFoundError when it does not exist.
    """
    if "/" not in cmd:
        return None
    if not os.path.exists(cmd):
        raise CommandNotFoundError(f"command not found: {cmd}")
    if not os.access(cmd, os.X_OK):
        raise PermissionDeniedError(f"{cmd}: permission denied")
    return cmd


def search_in_path(name: str, path_dirs: list[str] | None) -> str:
    """Return the first ``dir/name`` in ``path_dirs`` that is executable."""
    for directory in path_dirs or ():
        full_path = f"{directory}/{name}"
        if os.access(full_path, os.X_OK):
            return full_path
    raise CommandNotFoundError(f"command not found: {name}")


def resolve_command(cmd_str: str, env: Mapping[str, str] | None) -> Command:
    """Parse ``cmd_str`` and find its executable.

    A command without a slash is looked up in PATH; when the environment has
    no PATH entry a default search path is used.
    """
    args = shell_split(cmd_str)
    if not args:
        raise CommandNotFoundError("Invalid command")
    direct = check_direct_command(args[0])
    if direct is not None:
        return Command(direct, args)
    path_env = find_path_env(env)
    if path_env is None and env is not None:
        path_env = DEFAULT_PATH
    return Command(search_in_path(args[0], split_path_dirs(path_env)), args)


def _is_runnable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def resolve_command_bonus(cmd_str: str, env: Mapping[str, str] | None) -> Command:
    """Parse ``cmd_str`` and find its executable, the multi-command way.

    A path with a slash that cannot be run fails with status 126; a missing
    PATH or a name found in none of its directories fails with status 127.
    """
    args = shell_split(cmd_str)
    if not args:
        raise CommandNotFoundError("command parsing failed")
    name = args[0]
    if "/" in name:
        if not _is_runnable(name):
            raise PermissionDeniedError("command execution failed")
        return Command(name, args)
    path_env = find_path_env(env)
    if path_env is None:
        raise CommandNotFoundError("command not found")
    for directory in split_path_dirs(path_env) or ():
        candidate = f"{directory}/{name}"
        if _is_runnable(candidate):
            return Command(candidate, args)
    raise CommandNotFoundError("command not found")