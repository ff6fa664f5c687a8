"""Table of contents assembly and cleanup.

Trees are assembled from flat, depth-tagged records with a depth stack: one
slot per depth holding the insertion point (a parent node) for the next record
at that depth. Input depth sequences are not trusted to be well-formed; every
record lands under the nearest available ancestor, and records whose depth is
out of range are skipped.
"""

import logging
from collections.abc import Iterable

from docnav.document.markers import MAX_HEADING_LEVELS, Marker
from docnav.document.model import TocItem
from docnav.document.records import TocRecord

logger = logging.getLogger(__name__)

# Deepest nesting accepted for collaborator-supplied records (0-indexed)
MAX_TOC_DEPTH = 32

# Slot value meaning "the root list"
_ROOT = -1


class TocBuilder:
    """Assembles a TOC forest from depth-tagged records.

    Nodes live in an arena and the depth stack holds arena indices, so the
    builder never keeps references into the tree it is growing.
    """

    def __init__(self, max_depth: int = MAX_TOC_DEPTH):
        self.max_depth = max_depth
        self._nodes: list[TocItem] = []
        self._roots: list[int] = []
        self._children: list[list[int]] = []
        # Slot d + 1 is set when a record at depth d is placed
        self._slots: list[int | None] = [None] * (max_depth + 2)
        self._slots[0] = _ROOT
        self.skipped = 0

    def add(self, name: str, reference: str | None, offset: int, depth: int) -> bool:
        """Place one record. Returns False if its depth was out of range."""
        if depth < 0 or depth > self.max_depth:
            logger.debug("Skipping TOC entry %r: depth %d out of range", name, depth)
            self.skipped += 1
            return False

        parent = _ROOT
        for i in range(depth, -1, -1):
            slot = self._slots[i]
            if slot is not None:
                parent = slot
                break

        index = len(self._nodes)
        self._nodes.append(TocItem(name=name, reference=reference, offset=offset))
        self._children.append([])
        if parent == _ROOT:
            self._roots.append(index)
        else:
            self._children[parent].append(index)

        self._slots[depth + 1] = index
        for i in range(depth + 2, len(self._slots)):
            self._slots[i] = None
        return True

    def build(self) -> list[TocItem]:
        """Link the arena into a tree and return the root list."""
        for index, child_indices in enumerate(self._children):
            self._nodes[index].children = [self._nodes[c] for c in child_indices]
        return [self._nodes[i] for i in self._roots]


def build_toc_from_records(
    records: Iterable[TocRecord], max_depth: int = MAX_TOC_DEPTH
) -> list[TocItem]:
    """Build a TOC tree from collaborator-supplied records with 0-indexed depths."""
    builder = TocBuilder(max_depth=max_depth)
    for record in records:
        builder.add(record.name, record.reference, record.offset, record.depth)
    if builder.skipped:
        logger.info("Skipped %d TOC records with out-of-range depth", builder.skipped)
    return builder.build()


def build_toc_from_headings(
    headings: Iterable[Marker], max_level: int = MAX_HEADING_LEVELS
) -> list[TocItem]:
    """Build a TOC tree from heading markers with 1-indexed levels.

    Heading level ``n`` is placed like a record at depth ``n - 1``.
    """
    builder = TocBuilder(max_depth=max_level - 1)
    for marker in headings:
        level = marker.level if marker.level is not None else 0
        if level < 1 or level > max_level:
            logger.debug("Skipping heading %r: level %d out of range", marker.text, level)
            continue
        builder.add(marker.text or "", None, marker.position, level - 1)
    return builder.build()


def _is_redundant_wrapper(item: TocItem) -> bool:
    if not item.children:
        return False
    first = item.children[0]
    if item.name.casefold() != first.name.casefold():
        return False
    return not item.reference or item.reference == first.reference


def cleanup_toc(items: list[TocItem]) -> list[TocItem]:
    """Collapse entries whose first child repeats the entry's own title.

    A parent with no reference takes over its first child's reference and
    offset; the first child is removed and its children are spliced in at its
    place. Nodes are handled children-first, and each node is collapsed until
    its first child no longer qualifies, so one pass reaches a fixed point.
    Modifies ``items`` in place and returns it.
    """
    # Explicit post-order traversal; TOC input can be nested arbitrarily deep
    stack: list[tuple[TocItem, bool]] = [(item, False) for item in reversed(items)]
    while stack:
        item, children_done = stack.pop()
        if not children_done:
            stack.append((item, True))
            stack.extend((child, False) for child in reversed(item.children))
            continue

        while _is_redundant_wrapper(item):
            first = item.children[0]
            if not item.reference and first.reference:
                item.reference = first.reference
                item.offset = first.offset
            item.children[0:1] = first.children
    return items
