"""Positional text search over a document buffer.

Searches are pure functions of (text, needle, offset, options). A miss is
reported as ``None``, and so is a pattern that fails to compile: callers never
have to tell a broken query apart from an absent one.
"""

import logging
import re
from collections.abc import Iterator
from enum import Flag, auto

logger = logging.getLogger(__name__)


class FindOptions(Flag):
    """Search option flags. Without FORWARD the search runs backward."""

    NONE = 0
    FORWARD = auto()
    MATCH_CASE = auto()
    MATCH_WHOLE_WORD = auto()
    USE_REGEX = auto()


def _fold(text: str) -> str:
    """Lowercase text one character at a time, so offsets stay valid.

    Characters whose lowercase form is more than one code point (e.g. U+0130)
    are kept as-is. Folding per character also keeps context rules such as the
    Greek final sigma out of the comparison.
    """
    return "".join(low if len(low := c.lower()) == 1 else c for c in text)


def _is_whole_word(text: str, pos: int, length: int) -> bool:
    if pos > 0 and text[pos - 1].isalnum():
        return False
    end = pos + length
    return not (end < len(text) and text[end].isalnum())


def _find_literal(haystack: str, needle: str, start: int, options: FindOptions) -> int | None:
    forward = FindOptions.FORWARD in options
    if FindOptions.MATCH_CASE in options:
        text, pattern = haystack, needle
    else:
        text, pattern = _fold(haystack), _fold(needle)

    # Backward matches must end at or before ``start``
    pos = text.find(pattern, start) if forward else text.rfind(pattern, 0, start)
    if FindOptions.MATCH_WHOLE_WORD not in options:
        return pos if pos >= 0 else None

    while pos >= 0:
        if _is_whole_word(haystack, pos, len(pattern)):
            return pos
        if forward:
            pos = text.find(pattern, pos + 1)
        elif pos == 0:
            break
        else:
            # Next candidate starts one position further back
            pos = text.rfind(pattern, 0, pos - 1 + len(pattern))
    return None


def _compile(needle: str, options: FindOptions) -> re.Pattern[str] | None:
    pattern = needle
    if FindOptions.MATCH_WHOLE_WORD in options:
        pattern = rf"\b(?:{needle})\b"
    flags = 0 if FindOptions.MATCH_CASE in options else re.IGNORECASE
    try:
        return re.compile(pattern, flags)
    except (re.error, OverflowError) as e:
        logger.debug("Invalid search pattern %r: %s", needle, e)
        return None


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def _find_regex(haystack: str, needle: str, start: int, options: FindOptions) -> int | None:
    rx = _compile(needle, options)
    if rx is None:
        return None

    if FindOptions.FORWARD in options:
        match = rx.search(haystack, start)
        return match.start() if match else None

    whole_word = FindOptions.MATCH_WHOLE_WORD in options
    # Keep the rightmost match inside the prefix ending at ``start``
    last: int | None = None
    cur = 0
    while cur <= start:
        match = rx.search(haystack, cur, start)
        if match is None:
            break
        # ``\b`` sees the end of the prefix as a boundary; check the real text
        if not (
            whole_word
            and match.end() == start < len(haystack)
            and _is_word_char(haystack[start])
        ):
            last = match.start()
        cur = match.start() + 1
    return last



def find_text(
    haystack: str,
    needle: str,
    start: int = 0,
    options: FindOptions = FindOptions.FORWARD,
) -> int | None:
    """Find ``needle`` in ``haystack`` relative to ``start``.

    Forward searches return the first match beginning at or after ``start``.
    Backward searches return the last match lying wholly before ``start``.
    Matching is case-insensitive unless MATCH_CASE is set. MATCH_WHOLE_WORD
    requires non-alphanumeric characters (or the text edges) on both sides.

    Returns:
        Offset of the match, or None if there is none or the pattern is invalid.
    """
    if not needle:
        return None
    start = max(0, min(start, len(haystack)))
    if FindOptions.USE_REGEX in options:
        return _find_regex(haystack, needle, start, options)
    return _find_literal(haystack, needle, start, options)


def find_all(
    haystack: str, needle: str, options: FindOptions = FindOptions.NONE
) -> Iterator[int]:
    """Yield the offset of every match in forward order.

    Direction flags in ``options`` are ignored. Overlapping matches are all
    reported.
    """
    options = options | FindOptions.FORWARD
    pos = 0
    while pos <= len(haystack):
        found = find_text(haystack, needle, pos, options)
        if found is None:
            return
        yield found
        pos = found + 1


def match_length(
    haystack: str, needle: str, offset: int, options: FindOptions = FindOptions.FORWARD
) -> int:
    """Return the length of the match found at ``offset``.

    Literal matches are as long as the needle. A regex is matched again at the
    offset; 0 is returned if it no longer matches there.
    """
    if FindOptions.USE_REGEX not in options:
        return len(needle)
    rx = _compile(needle, options)
    if rx is None:
        return 0
    match = rx.match(haystack, offset)
    return match.end() - offset if match else 0
