"""Normalized records handed over by format parsers.

Every parser, whatever the source format, produces a ``NormalizedDocument``:
plain text, positional markers, an optional native TOC flattened with explicit
depths, anchor offsets and metadata. The loader turns it into a ``Document``.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from docnav.document.markers import MarkerKind


class MarkerRecord(BaseModel):
    """A positional annotation as emitted by a parser."""

    position: int = Field(ge=0, description="Character offset into the content")
    kind: MarkerKind = Field(description="Kind of annotation")
    text: str | None = Field(default=None, description="Display label")
    reference: str | None = Field(default=None, description="Target identifier")
    level: int | None = Field(default=None, description="Heading nesting level (1-indexed)")


class TocRecord(BaseModel):
    """A native TOC entry flattened with its 0-indexed depth."""

    name: str = Field(description="Display name")
    reference: str | None = Field(default=None, description="Anchor or file reference")
    offset: int = Field(default=0, ge=0, description="Character offset of the target")
    depth: int = Field(default=0, description="Nesting depth, 0 for top level")


class IdPosition(BaseModel):
    """An anchor identifier and the offset it points at."""

    identifier: str
    offset: int = Field(ge=0)


class ManifestItem(BaseModel):
    """A manifest entry of a multi-file format."""

    id: str
    path: str


class StatsRecord(BaseModel):
    """Text statistics computed by the parser, passed through unmodified."""

    word_count: int = Field(default=0, ge=0)
    line_count: int = Field(default=0, ge=0)
    char_count: int = Field(default=0, ge=0)


class NormalizedDocument(BaseModel):
    """Complete normalized output of a format parser."""

    title: str | None = None
    author: str | None = None
    content: str = Field(description="Full document text")
    markers: list[MarkerRecord] = Field(default_factory=list)
    toc_records: list[TocRecord] | None = Field(
        default=None, description="Native TOC, if the format carries one"
    )
    id_positions: list[IdPosition] = Field(default_factory=list)
    stats: StatsRecord | None = None
    spine_items: list[str] = Field(default_factory=list)
    manifest_items: list[ManifestItem] = Field(default_factory=list)


RECORD_SUFFIXES = frozenset([".json", ".yaml", ".yml"])


def load_records(path: str | Path) -> NormalizedDocument:
    """Load normalized records from a JSON or YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the suffix is not a records format or the file does not parse
        pydantic.ValidationError: If the records are malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in RECORD_SUFFIXES:
        raise ValueError(f"Unsupported records format: {suffix or path.name}")

    with path.open("r", encoding="utf-8") as f:
        try:
            data: Any = json.load(f) if suffix == ".json" else yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    return NormalizedDocument.model_validate(data or {})
