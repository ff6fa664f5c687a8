"""Base class for format parsers."""

from abc import ABC, abstractmethod
from enum import Flag, auto
from pathlib import Path

from docnav.document.records import NormalizedDocument
from docnav.utils.text import convert_to_utf8


class ParserFlags(Flag):
    """Navigation features a format can provide."""

    NONE = 0
    SUPPORTS_SECTIONS = auto()
    SUPPORTS_TOC = auto()
    SUPPORTS_PAGES = auto()
    SUPPORTS_LISTS = auto()


class ParserError(Exception):
    """A parser could not turn a file into normalized records."""

    def __init__(self, message: str, path: str | Path):
        super().__init__(message)
        self.path = Path(path)


class DocumentParser(ABC):
    """Turns one file format into a ``NormalizedDocument``."""

    name: str = ""
    extensions: tuple[str, ...] = ()
    flags: ParserFlags = ParserFlags.NONE

    @abstractmethod
    def parse(self, path: Path) -> NormalizedDocument:
        """
        Parse a file into normalized records.

        Requirements:
        - Deterministic output for same input
        - Marker and anchor offsets index into the returned content
        - Raise ParserError when the file is unreadable or empty
        """
        raise NotImplementedError

    def read_text(self, path: Path) -> str:
        """Read a file as text, rejecting empty files."""
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ParserError(f"Failed to open {self.name} file: {e}", path) from e
        if not data:
            raise ParserError(f"File is empty: {path}", path)
        return convert_to_utf8(data)
