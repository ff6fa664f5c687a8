"""Builds a navigable ``Document`` from normalized parser output."""

import logging

from docnav.document.model import Document, DocumentStats
from docnav.document.records import NormalizedDocument
from docnav.document.toc import (
    MAX_TOC_DEPTH,
    build_toc_from_headings,
    build_toc_from_records,
    cleanup_toc,
)

logger = logging.getLogger(__name__)


class NoContentError(ValueError):
    """Raised when a parsed document has no usable text."""


def build_document(
    records: NormalizedDocument, *, cleanup: bool = True, max_depth: int = MAX_TOC_DEPTH
) -> Document:
    """Build a document: populate the buffer, assemble and clean up the TOC.

    The native TOC is used when the parser supplied one, otherwise the TOC is
    derived from heading markers. Malformed records are skipped; only a
    document without usable text is rejected.

    Args:
        records: Normalized parser output
        cleanup: Collapse redundant self-titled TOC wrappers
        max_depth: Deepest native TOC depth accepted

    Raises:
        NoContentError: If the content is empty or whitespace only
    """
    if not records.content.strip():
        logger.warning("Rejecting document %r: no content", records.title)
        raise NoContentError("Document has no readable content")

    doc = Document(title=records.title, author=records.author)
    doc.buffer.set_content(records.content)
    for marker in records.markers:
        doc.buffer.add_marker(
            marker.position,
            marker.kind,
            text=marker.text,
            reference=marker.reference,
            level=marker.level,
        )
    doc.buffer.finalize_markers()

    if records.toc_records is not None:
        toc_items = build_toc_from_records(records.toc_records, max_depth=max_depth)
    else:
        toc_items = build_toc_from_headings(doc.buffer.get_heading_markers())
    if cleanup:
        cleanup_toc(toc_items)
    doc.attach_toc(toc_items)

    # Later duplicates win
    for entry in records.id_positions:
        doc.id_positions[entry.identifier] = entry.offset
    doc.spine_items = list(records.spine_items)
    doc.manifest_items = {item.id: item.path for item in records.manifest_items}

    if records.stats is not None:
        doc.stats = DocumentStats(
            word_count=records.stats.word_count,
            line_count=records.stats.line_count,
            char_count=records.stats.char_count,
        )
    else:
        doc.compute_stats()

    logger.debug(
        "Built document %r: %d markers, %d top-level TOC entries",
        doc.title,
        len(doc.buffer.markers),
        len(doc.toc_items),
    )
    return doc
