"""Document model: marker store, table of contents and text search."""

from .loader import NoContentError, build_document
from .markers import MAX_HEADING_LEVELS, Marker, MarkerKind, MarkerStore
from .model import Document, DocumentStats, TocItem
from .records import (
    IdPosition,
    ManifestItem,
    MarkerRecord,
    NormalizedDocument,
    StatsRecord,
    TocRecord,
    load_records,
)
from .search import FindOptions, find_all, find_text, match_length
from .toc import (
    MAX_TOC_DEPTH,
    TocBuilder,
    build_toc_from_headings,
    build_toc_from_records,
    cleanup_toc,
)

__all__ = [
    "Document",
    "DocumentStats",
    "TocItem",
    "Marker",
    "MarkerKind",
    "MarkerStore",
    "MAX_HEADING_LEVELS",
    "NormalizedDocument",
    "MarkerRecord",
    "TocRecord",
    "IdPosition",
    "ManifestItem",
    "StatsRecord",
    "load_records",
    "TocBuilder",
    "MAX_TOC_DEPTH",
    "build_toc_from_headings",
    "build_toc_from_records",
    "cleanup_toc",
    "FindOptions",
    "find_text",
    "find_all",
    "match_length",
    "NoContentError",
    "build_document",
]
