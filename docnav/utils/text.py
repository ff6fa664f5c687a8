"""Text normalization helpers shared by the format parsers."""

import codecs
from urllib.parse import unquote_plus

SOFT_HYPHEN = "\u00ad"


def remove_soft_hyphens(text: str) -> str:
    """Strip soft hyphens (U+00AD) from text."""
    return text.replace(SOFT_HYPHEN, "")


def url_decode(encoded: str) -> str:
    """Percent-decode a URL component. ``+`` decodes to a space."""
    return unquote_plus(encoded, errors="replace")


def collapse_whitespace(text: str) -> str:
    """Collapse each run of whitespace into a single space.

    Non-breaking spaces count as whitespace (``str.isspace`` is Unicode-aware).
    """
    result: list[str] = []
    prev_was_space = False
    for ch in text:
        if ch.isspace():
            if not prev_was_space:
                result.append(" ")
                prev_was_space = True
        else:
            result.append(ch)
            prev_was_space = False
    return "".join(result)


def trim_string(text: str) -> str:
    """Trim whitespace, non-breaking spaces included, from both ends."""
    return text.strip()


def compute_stats(text: str) -> tuple[int, int, int]:
    """Count words, lines and characters.

    Returns:
        Tuple of (word_count, line_count, char_count)
    """
    return len(text.split()), len(text.splitlines()), len(text)


# Longest BOMs first: the UTF-32 LE BOM starts with the UTF-16 LE one
_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def convert_to_utf8(data: bytes) -> str:
    """Decode raw file bytes to text.

    A byte order mark selects the encoding; otherwise UTF-8 is tried, then
    Windows-1252.
    """
    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data[len(bom) :].decode(encoding, errors="replace")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("cp1252", errors="replace")
