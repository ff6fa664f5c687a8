"""Document model: the navigable result of loading a parsed document."""

from dataclasses import dataclass, field

from docnav.document.markers import MarkerKind, MarkerStore
from docnav.utils.text import compute_stats


@dataclass
class TocItem:
    """An entry in the table of contents tree."""

    name: str
    reference: str | None = None  # Anchor or file reference, None if not navigable by id
    offset: int = 0
    children: list["TocItem"] = field(default_factory=list)

    def get_all_items(self) -> list["TocItem"]:
        """Get this item and all descendants in document order."""
        items: list[TocItem] = []
        stack: list[TocItem] = [self]
        while stack:
            item = stack.pop()
            items.append(item)
            stack.extend(reversed(item.children))
        return items


@dataclass
class DocumentStats:
    """Aggregate text statistics."""

    word_count: int = 0
    line_count: int = 0
    char_count: int = 0

    @classmethod
    def from_text(cls, text: str) -> "DocumentStats":
        words, lines, chars = compute_stats(text)
        return cls(word_count=words, line_count=lines, char_count=chars)


@dataclass
class Document:
    """Aggregate root for a loaded document.

    Built once by the loader and read-only afterwards, apart from the single
    ``attach_toc`` step.
    """

    title: str | None = None
    author: str | None = None
    buffer: MarkerStore = field(default_factory=MarkerStore)
    toc_items: list[TocItem] = field(default_factory=list)
    id_positions: dict[str, int] = field(default_factory=dict)
    manifest_items: dict[str, str] = field(default_factory=dict)
    spine_items: list[str] = field(default_factory=list)
    stats: DocumentStats = field(default_factory=DocumentStats)
    _toc_attached: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def text(self) -> str:
        return self.buffer.content

    def attach_toc(self, items: list[TocItem]) -> None:
        """Attach the table of contents. Allowed exactly once."""
        if self._toc_attached:
            raise RuntimeError("Table of contents is already attached")
        self.toc_items = items
        self._toc_attached = True

    def compute_stats(self) -> None:
        self.stats = DocumentStats.from_text(self.buffer.content)

    def get_all_toc_items(self) -> list[TocItem]:
        """Get all TOC items in document order (flattened tree)."""
        items: list[TocItem] = []
        for item in self.toc_items:
            items.extend(item.get_all_items())
        return items

    def find_toc_item(self, offset: int) -> TocItem | None:
        """Find the TOC item covering an offset.

        This is the item with the greatest offset not past ``offset``; among
        items sharing that offset the deepest one wins.
        """
        best: TocItem | None = None
        for item in self.get_all_toc_items():
            if item.offset <= offset and (best is None or item.offset >= best.offset):
                best = item
        return best

    def resolve_reference(self, reference: str) -> int | None:
        """Resolve a cross-reference to a buffer offset.

        Accepts ``"path#anchor"``, ``"#anchor"`` or a bare anchor id. When the
        anchor is unknown, a path naming a manifest item that is in the spine
        resolves to the start of that spine section.
        """
        path, _, fragment = reference.partition("#")
        if fragment and fragment in self.id_positions:
            return self.id_positions[fragment]
        if not fragment and path in self.id_positions:
            return self.id_positions[path]
        if path:
            return self._spine_offset(path)
        return None

    def _spine_offset(self, path: str) -> int | None:
        for item_id, item_path in self.manifest_items.items():
            if item_path != path and item_path.rsplit("/", 1)[-1] != path:
                continue
            if item_id not in self.spine_items:
                return None
            # Each spine item opens with a section break referencing its id
            for marker in self.buffer.markers_of_kind(MarkerKind.SECTION_BREAK):
                if marker.reference == item_id:
                    return marker.position
            return 0 if self.spine_items[0] == item_id else None
        return None

