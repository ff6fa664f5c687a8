"""Plain text parser."""

from pathlib import Path

from docnav.document.records import NormalizedDocument
from docnav.utils.text import remove_soft_hyphens

from .base import DocumentParser, ParserFlags


class TextParser(DocumentParser):
    """Plain text and log files. No navigation structure beyond the text."""

    name = "Text Files"
    extensions = ("txt", "log")
    flags = ParserFlags.NONE

    def parse(self, path: Path) -> NormalizedDocument:
        content = remove_soft_hyphens(self.read_text(path))
        return NormalizedDocument(title=path.stem or "Untitled", content=content)
