"""Pytest configuration and fixtures."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from docnav.document.markers import MarkerKind
from docnav.document.records import (
    IdPosition,
    ManifestItem,
    MarkerRecord,
    NormalizedDocument,
    TocRecord,
)


@pytest.fixture
def temp_workspace() -> Generator[Path, None, None]:
    """Create a temporary workspace directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def book_markdown() -> str:
    """A markdown book with nested headings, an anchor, a list and a link."""
    return """# Moby Dick

## Loomings {#loomings}

Call me Ishmael. See [the carpet-bag](#carpet-bag) for more.

### The Spouter-Inn

- harpoons
- lances

## The Carpet-Bag {#carpet-bag}

I stuffed a shirt or two into my old carpet-bag.
"""


@pytest.fixture
def heading_records() -> NormalizedDocument:
    """Normalized records with heading markers and no native TOC."""
    content = "Intro\nBody text.\nChapter One\nMore text.\nSection A\nEnd.\n"

    def heading(text: str, level: int) -> MarkerRecord:
        return MarkerRecord(
            position=content.index(text), kind=MarkerKind.HEADING, text=text, level=level
        )

    # Deliberately out of order; the loader sorts markers by position
    return NormalizedDocument(
        title="Headings Only",
        content=content,
        markers=[heading("Section A", 2), heading("Intro", 1), heading("Chapter One", 1)],
    )


@pytest.fixture
def native_toc_records() -> NormalizedDocument:
    """Normalized records from a multi-file format with a native TOC."""
    content = "Part One\n\nChapter 1 text.\n\nChapter 2 text.\n"
    ch1 = content.index("Chapter 1")
    ch2 = content.index("Chapter 2")
    return NormalizedDocument(
        title="Container Book",
        author="A. Writer",
        content=content,
        markers=[
            MarkerRecord(
                position=0, kind=MarkerKind.SECTION_BREAK, text="Section 1", reference="ch1"
            ),
            MarkerRecord(
                position=ch2, kind=MarkerKind.SECTION_BREAK, text="Section 2", reference="ch2"
            ),
        ],
        toc_records=[
            TocRecord(name="Part One", reference=None, offset=0, depth=0),
            TocRecord(name="Part One", reference="ch1.xhtml", offset=ch1, depth=1),
            TocRecord(name="Chapter 2", reference="ch2.xhtml#start", offset=ch2, depth=1),
        ],
        id_positions=[
            IdPosition(identifier="start", offset=ch2),
            IdPosition(identifier="intro", offset=0),
            IdPosition(identifier="intro", offset=ch1),
        ],
        spine_items=["ch1", "ch2"],
        manifest_items=[
            ManifestItem(id="ch1", path="OEBPS/ch1.xhtml"),
            ManifestItem(id="ch2", path="OEBPS/ch2.xhtml"),
        ],
    )
