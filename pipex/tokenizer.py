"""Split a command string into arguments with simple shell quoting rules."""

from __future__ import annotations

from dataclasses import dataclass

_SPACES = frozenset(" \t\n\r\v\f")


@dataclass
class QuoteState:
    """Whether a scan is currently inside single or double quotes."""

    single: bool = False
    double: bool = False

    @property
    def quoted(self) -> bool:
        return self.single or self.double

    def feed(self, char: str) -> bool:
        """Toggle quoting for ``char``; return True if it was a quote that toggled."""
        if char == "'" and not self.double:
            self.single = not self.single
            return True
        if char == '"' and not self.single:
            self.double = not self.double
            return True
        return False


def is_space(char: str) -> bool:
    """Return True for the ASCII whitespace characters."""
    return len(char) == 1 and char in _SPACES


def is_in_quotes(s: str, pos: int) -> bool:
    """Return True if position ``pos`` of ``s`` lies inside quotes."""
    state = QuoteState()
    i = 0
    limit = min(pos, len(s))
    while i < limit:
        if s[i] == "\\":
            i += 2
            continue
        state.feed(s[i])
        i += 1
    return state.quoted


def skip_spaces(s: str, pos: int) -> int:
    """Return the first position at or after ``pos`` that is not an unquoted space."""
    while pos < len(s) and is_space(s[pos]) and not is_in_quotes(s, pos):
        pos += 1
    return pos


def token_end(s: str, start: int, state: QuoteState | None = None) -> int:
    """Return the position just past the token starting at ``start``.

    Backslashes escape the following character. ``state`` carries the quote
    state across calls and is updated in place.
    """
    if state is None:
        state = QuoteState()
    j = start
    length = len(s)
    while j < length:
        char = s[j]
        if char == "\\":
            j += 2
            continue
        if not state.feed(char) and not state.quoted and is_space(char):
            break
        j += 1
    return min(j, length)


def count_tokens(s: str) -> int:
    """Count the tokens in ``s``."""
    count = 0
    state = QuoteState()
    j = 0
    while j < len(s):
        j = skip_spaces(s, j)
        if j >= len(s):
            break
        count += 1
        j = token_end(s, j, state)
    return count


def strip_quotes(token: str) -> str:
    """Remove one pair of matching quotes surrounding the whole token."""
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "'\"":
        return token[1:-1]
    return token


def unescape_quotes(token: str) -> str:
    """Turn every ``\\"`` into a plain double quote."""
    return token.replace('\\"', '"')


def process_token(s: str, start: int, end: int) -> str:
    """Extract ``s[start:end]`` and remove its quoting."""
    return unescape_quotes(strip_quotes(s[start:end]))


def _split_index(token: str) -> int:
    state = QuoteState()
    for index, char in enumerate(token):
        if not state.feed(char) and not state.quoted and is_space(char):
            return index
    return len(token)


def _split_awk(token: str) -> list[str]:
    index = _split_index(token)
    program_name = token[:index]
    rest = token[index:].lstrip(" \t\n\r\v\f")
    return [program_name, process_token(rest, 0, len(rest))]


def shell_split(s: str) -> list[str]:
    """Split a command string into its argument list.

    A single token that begins with ``awk `` (such as a whole quoted awk
    invocation) is split again into the program name and its script.
    """
    max_count = count_tokens(s)
    result: list[str] = []
    j = 0
    while j < len(s) and len(result) < max_count:
        j = skip_spaces(s, j)
        if j >= len(s):
            break
        start = j
        j = token_end(s, j)
        token = process_token(s, start, j)
        if token.startswith("awk "):
            result.extend(_split_awk(token))
        else:
            result.append(token)
    return result