import io
import os

import pytest

from pipex.context import init_heredoc_context
from pipex.errors import PipexError
from pipex.heredoc import PROMPT, handle_heredoc, is_limiter_line, read_heredoc


@pytest.mark.parametrize(
    "line, limiter, expected",
    [
        ("END\n", "END", True),
        ("END", "END", True),
        ("ENDX\n", "END", False),
        ("EN\n", "END", False),
        (" END\n", "END", False),
        ("abc\n", "END", False),
    ],
)
def test_is_limiter_line(line, limiter, expected):
    assert is_limiter_line(line, limiter) is expected


def test_read_stops_at_limiter():
    source = io.StringIO("apple\nbanana\nEND\ncherry\n")
    prompts = io.StringIO()
    assert read_heredoc("END", source, prompts) == "apple\nbanana\n"
    assert prompts.getvalue() == PROMPT * 3
    assert source.readline() == "cherry\n"


def test_read_until_end_of_input():
    source = io.StringIO("one\ntwo\n")
    prompts = io.StringIO()
    assert read_heredoc("END", source, prompts) == "one\ntwo\n"
    assert prompts.getvalue() == PROMPT * 3


def test_read_empty_document():
    prompts = io.StringIO()
    assert read_heredoc("END", io.StringIO("END\n"), prompts) == ""
    assert prompts.getvalue() == "heredoc> "


def _read_all(fd):
    chunks = []
    while True:
        chunk = os.read(fd, 4096)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


def test_handle_heredoc_sets_up_descriptors(tmp_path):
    outfile = tmp_path / "result.txt"
    outfile.write_text("kept\n")
    ctx = init_heredoc_context(
        ["pipex", "here_doc", "END", "tr a-z A-Z", "cat", str(outfile)], None
    )
    try:
        handle_heredoc(ctx, io.StringIO("hello\nworld\nEND\n"), io.StringIO())
        assert _read_all(ctx.in_fd) == b"hello\nworld\n"
        os.write(ctx.out_fd, b"more\n")
    finally:
        ctx.close()
    assert outfile.read_text() == "kept\nmore\n"


def test_handle_heredoc_large_document(tmp_path):
    ctx = init_heredoc_context(
        ["pipex", "here_doc", "EOF", "cat", "cat", str(tmp_path / "o")], None
    )
    text = "line of text\n" * 20000
    try:
        handle_heredoc(ctx, io.StringIO(text + "EOF\n"), io.StringIO())
        assert _read_all(ctx.in_fd) == text.encode()
    finally:
        ctx.close()


def test_handle_heredoc_unopenable_output(tmp_path):
    target = tmp_path / "no_dir" / "out.txt"
    ctx = init_heredoc_context(["pipex", "here_doc", "END", "cat", "cat", str(target)], None)
    with pytest.raises(PipexError) as info:
        handle_heredoc(ctx, io.StringIO("x\nEND\n"), io.StringIO())
    assert info.value.message == "could not open output file"
    assert info.value.code == 1
    assert ctx.cleaned is True