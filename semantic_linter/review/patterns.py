"""Glob matching for repository paths with ``**`` support."""

import re
from functools import lru_cache


class PatternError(ValueError):
    """Raised when a glob pattern is malformed."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


def match(path: str, pattern: str) -> bool:
    """
    Check whether a slash-separated path matches a glob pattern.

    Supported syntax:
        *       any characters except ``/``
        ?       one character except ``/``
        **      as a whole segment, zero or more directories
        [a-z]   character class, ``[!...]`` or ``[^...]`` negates
        {a,b}   alternation, may nest
        \\x      literal ``x``

    Args:
        path: File path as reported by GitHub (e.g. "src/app/main.go")
        pattern: Glob pattern (e.g. "src/**/*.go")

    Returns:
        True if the whole path matches

    Raises:
        PatternError: If the pattern is malformed
    """
    return compile_pattern(pattern).fullmatch(path) is not None


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern:
    """Translate a glob pattern to a compiled regular expression."""
    try:
        return re.compile(_translate(pattern), re.DOTALL)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def _translate(pattern: str) -> str:
    parts = []
    # per open brace group: whether it began at a segment start
    brace_starts = []
    segment_start = True
    i = 0
    n = len(pattern)

    while i < n:
        c = pattern[i]
        at_segment_start = segment_start
        segment_start = False

        if c == "*":
            if (
                at_segment_start
                and pattern.startswith("**", i)
                and (i + 2 == n or pattern[i + 2] in "/,}")
            ):
                if i + 2 < n and pattern[i + 2] == "/":
                    # "**/" also matches no directory at all
                    parts.append("(?:.*/)?")
                    segment_start = True
                    i += 3
                    continue
                if parts and parts[-1] == "/":
                    # trailing "/**" matches the directory itself too
                    parts[-1] = "(?:/.*)?"
                else:
                    parts.append(".*")
                i += 2
                continue
            while i < n and pattern[i] == "*":
                i += 1
            parts.append("[^/]*")
            continue

        if c == "?":
            parts.append("[^/]")
        elif c == "[":
            end = _find_class_end(pattern, i)
            if end < 0:
                raise PatternError(pattern, "unterminated character class")
            parts.append(_translate_class(pattern[i + 1 : end]))
            i = end + 1
            continue
        elif c == "{":
            brace_starts.append(at_segment_start)
            parts.append("(?:")
            segment_start = at_segment_start
        elif c == "}" and brace_starts:
            brace_starts.pop()
            parts.append(")")
        elif c == "," and brace_starts:
            parts.append("|")
            segment_start = brace_starts[-1]
        elif c == "\\":
            if i + 1 == n:
                raise PatternError(pattern, "trailing escape character")
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        elif c == "/":
            parts.append("/")
            segment_start = True
        else:
            parts.append(re.escape(c))
        i += 1

    if brace_starts:
        raise PatternError(pattern, "unterminated alternation")

    return "".join(parts)


def _find_class_end(pattern: str, start: int) -> int:
    i = start + 1
    if i < len(pattern) and pattern[i] in "!^":
        i += 1
    # a leading "]" is a literal member of the class
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    while i < len(pattern):
        if pattern[i] == "\\":
            i += 2
            continue
        if pattern[i] == "]":
            return i
        i += 1
    return -1


def _translate_class(body: str) -> str:
    negate = body[:1] in ("!", "^")
    if negate:
        body = body[1:]

    members = []
    i = 0
    while i < len(body):
        c = body[i]
        if c == "\\" and i + 1 < len(body):
            members.append(re.escape(body[i + 1]))
            i += 2
            continue
        members.append("-" if c == "-" else re.escape(c))
        i += 1

    if negate:
        return f"[^/{''.join(members)}]"
    return f"(?!/)[{''.join(members)}]"
