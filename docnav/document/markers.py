"""Marker store: document text plus positional annotations."""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# Headings are 1-indexed: level 1 is the outermost heading
MAX_HEADING_LEVELS = 6


class MarkerKind(Enum):
    """Kind of positional annotation attached to the document text."""

    HEADING = "heading"
    PAGE_BREAK = "page_break"
    SECTION_BREAK = "section_break"
    TOC_ITEM = "toc_item"
    LINK = "link"
    LIST = "list"
    LIST_ITEM = "list_item"

    @property
    def is_heading(self) -> bool:
        return self is MarkerKind.HEADING


@dataclass
class Marker:
    """A positional annotation at a character offset in the buffer."""

    position: int
    kind: MarkerKind
    text: str | None = None
    reference: str | None = None  # Target identifier for links
    level: int | None = None  # Nesting depth, headings only


class MarkerStore:
    """Holds the flat document text and its ordered collection of markers.

    Markers may be added in any order. ``finalize_markers`` sorts them by
    position; ties keep their insertion order because several markers (a
    section break and a heading, say) can share one offset.
    """

    def __init__(self, content: str = ""):
        self._content = content
        self._markers: list[Marker] = []
        self._finalized = True

    @property
    def content(self) -> str:
        return self._content

    @property
    def markers(self) -> list[Marker]:
        return list(self._markers)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def current_position(self) -> int:
        """Offset at which the next appended text (or heading) lands."""
        return len(self._content)

    def __len__(self) -> int:
        return len(self._content)

    def set_content(self, text: str) -> None:
        """Replace the buffer text. Existing markers are kept as-is."""
        self._content = text

    def append(self, text: str) -> None:
        """Append text to the end of the buffer."""
        self._content += text

    def add_marker(
        self,
        position: int,
        kind: MarkerKind,
        text: str | None = None,
        reference: str | None = None,
        level: int | None = None,
    ) -> Marker:
        """Append a marker.

        Offsets are not validated here: an offset past the end of the text is
        stored and simply never resolves to a meaningful display position.
        """
        marker = Marker(position=position, kind=kind, text=text, reference=reference, level=level)
        self._markers.append(marker)
        self._finalized = False
        return marker

    def add_heading(self, level: int, text: str) -> Marker:
        """Add a heading marker at the current append position."""
        return self.add_marker(self.current_position, MarkerKind.HEADING, text=text, level=level)

    def finalize_markers(self) -> None:
        """Sort markers by position. Stable, so equal positions keep insertion order."""
        if self._finalized:
            return
        self._markers.sort(key=lambda m: m.position)
        self._finalized = True

    def _ensure_finalized(self) -> None:
        if not self._finalized:
            logger.debug("Markers queried before finalization; finalizing now")
            self.finalize_markers()

    def get_heading_markers(self, level: int | None = None) -> list[Marker]:
        """Get heading markers in position order, optionally for one level only.

        Reading before ``finalize_markers`` finalizes the store first, so the
        result is always position-sorted.
        """
        self._ensure_finalized()
        return [
            m
            for m in self._markers
            if m.kind.is_heading and (level is None or m.level == level)
        ]

    def markers_of_kind(self, kind: MarkerKind) -> list[Marker]:
        """Get all markers of one kind in position order."""
        self._ensure_finalized()
        return [m for m in self._markers if m.kind is kind]

    def next_marker(self, position: int, kind: MarkerKind) -> Marker | None:
        """Find the first marker of a kind strictly after a position."""
        for marker in self.markers_of_kind(kind):
            if marker.position > position:
                return marker
        return None

    def previous_marker(self, position: int, kind: MarkerKind) -> Marker | None:
        """Find the last marker of a kind strictly before a position."""
        found: Marker | None = None
        for marker in self.markers_of_kind(kind):
            if marker.position >= position:
                break
            found = marker
        return found

    def marker_index_at(self, position: int) -> int | None:
        """Index of the last marker at or before a position, if any."""
        self._ensure_finalized()
        index: int | None = None
        for i, marker in enumerate(self._markers):
            if marker.position > position:
                break
            index = i
        return index
