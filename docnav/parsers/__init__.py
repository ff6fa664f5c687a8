"""Format parsers producing normalized document records."""

from .base import DocumentParser, ParserError, ParserFlags
from .markdown import MarkdownParser
from .registry import ParserInfo, ParserRegistry, load_document, parse_document
from .text import TextParser

__all__ = [
    "DocumentParser",
    "ParserError",
    "ParserFlags",
    "ParserInfo",
    "ParserRegistry",
    "MarkdownParser",
    "TextParser",
    "load_document",
    "parse_document",
]
