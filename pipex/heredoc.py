"""Read a here-document from standard input up to a limiter line."""

from __future__ import annotations

import os
import sys
import tempfile
from typing import TextIO

from pipex.context import OUTFILE_MODE, BonusContext
from pipex.errors import PipexError

PROMPT = "heredoc> "


def is_limiter_line(line: str, limiter: str) -> bool:
    """Return True if ``line`` is the limiter, with or without its newline."""
    return line.startswith(limiter) and line[len(limiter):] in ("", "\n")


def read_heredoc(
    limiter: str,
    source: TextIO | None = None,
    prompt_stream: TextIO | None = None,
) -> str:
    """Read lines from ``source`` until the limiter line or end of input.

    A prompt is written to ``prompt_stream`` before every line is read. The
    limiter line itself is not part of the result.
    """
    source = sys.stdin if source is None else source
    prompt_stream = sys.stdout if prompt_stream is None else prompt_stream
    lines: list[str] = []
    while True:
        prompt_stream.write(PROMPT)
        prompt_stream.flush()
        line = source.readline()
        if not line or is_limiter_line(line, limiter):
            break
        lines.append(line)
    return "".join(lines)


def handle_heredoc(
    context: BonusContext,
    source: TextIO | None = None,
    prompt_stream: TextIO | None = None,
) -> None:
    """Read the here-document into the context's input and open its output.

    The output file is opened for appending. Raises PipexError when the
    input buffer or the output file cannot be set up.
    """
    content = read_heredoc(context.limiter or "", source, prompt_stream)
    try:
        with tempfile.TemporaryFile() as buffer:
            buffer.write(content.encode("utf-8", "surrogateescape"))
            buffer.flush()
            buffer.seek(0)
            context.in_fd = os.dup(buffer.fileno())
    except OSError as exc:
        raise PipexError("pipe failed", 1) from exc
    try:
        context.out_fd = os.open(
            context.outfile_path,
            os.O_WRONLY | os.O_CREAT | os.O_APPEND,
            OUTFILE_MODE,
        )
    except OSError as exc:
        context.close()
        raise PipexError("could not open output file", 1) from exc