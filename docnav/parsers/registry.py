"""Parser lookup by file extension and one-call document loading."""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from docnav.document.loader import build_document
from docnav.document.model import Document
from docnav.document.records import RECORD_SUFFIXES, NormalizedDocument, load_records
from docnav.document.toc import MAX_TOC_DEPTH

from .base import DocumentParser, ParserError, ParserFlags
from .markdown import MarkdownParser
from .text import TextParser

logger = logging.getLogger(__name__)


@dataclass
class ParserInfo:
    """Description of a registered parser."""

    name: str
    extensions: list[str]
    flags: ParserFlags


class ParserRegistry:
    """Registered parsers keyed by name."""

    def __init__(self):
        self._parsers: dict[str, DocumentParser] = {}

    def register(self, parser: DocumentParser) -> None:
        self._parsers[parser.name] = parser

    def get_parser(self, name: str) -> DocumentParser | None:
        return self._parsers.get(name)

    def get_parser_for_extension(self, extension: str) -> DocumentParser | None:
        """Find the parser for an extension (case-insensitive, leading dot optional)."""
        ext = extension.lower().lstrip(".")
        for parser in self._parsers.values():
            if ext in (e.lower() for e in parser.extensions):
                return parser
        return None

    def all_parsers(self) -> list[ParserInfo]:
        return [
            ParserInfo(name=p.name, extensions=list(p.extensions), flags=p.flags)
            for p in self._parsers.values()
        ]

    @staticmethod
    @lru_cache(maxsize=1)
    def global_registry() -> "ParserRegistry":
        """Get the shared registry with the built-in parsers."""
        registry = ParserRegistry()
        registry.register(TextParser())
        registry.register(MarkdownParser())
        return registry


def parse_document(path: str | Path, registry: ParserRegistry | None = None) -> NormalizedDocument:
    """Parse a file into normalized records with the parser for its extension.

    Raises:
        ParserError: If no parser handles the file or parsing fails
    """
    path = Path(path)
    registry = registry or ParserRegistry.global_registry()
    if not path.suffix:
        raise ParserError(f"No file extension found for: {path}", path)
    parser = registry.get_parser_for_extension(path.suffix)
    if parser is None:
        raise ParserError(f"No parser found for extension: {path.suffix}", path)
    logger.debug("Parsing %s with %s parser", path, parser.name)
    return parser.parse(path)


def load_document(
    path: str | Path,
    *,
    cleanup: bool = True,
    max_depth: int = MAX_TOC_DEPTH,
    registry: ParserRegistry | None = None,
) -> Document:
    """Load a document file, or a JSON/YAML file of normalized records.

    Raises:
        ParserError: If the file can't be parsed or its records are invalid
        NoContentError: If the document has no readable text
    """
    path = Path(path)
    if path.suffix.lower() in RECORD_SUFFIXES:
        try:
            records = load_records(path)
        except FileNotFoundError as e:
            raise ParserError(str(e), path) from e
        except (ValidationError, ValueError) as e:
            raise ParserError(f"Invalid records in {path}: {e}", path) from e
    else:
        records = parse_document(path, registry)
    return build_document(records, cleanup=cleanup, max_depth=max_depth)
