"""Markdown parser producing plain text with heading, list and link markers."""

import re
from dataclasses import dataclass, field
from pathlib import Path

from docnav.document.markers import MarkerKind
from docnav.document.records import IdPosition, MarkerRecord, NormalizedDocument
from docnav.utils.text import collapse_whitespace, trim_string, url_decode

from .base import DocumentParser, ParserFlags


@dataclass
class _Output:
    """Text being rendered plus the markers placed in it so far."""

    chunks: list[str] = field(default_factory=list)
    position: int = 0
    markers: list[MarkerRecord] = field(default_factory=list)

    def emit(self, text: str) -> None:
        self.chunks.append(text)
        self.position += len(text)

    def mark(self, kind: MarkerKind, *, position: int | None = None, **fields) -> MarkerRecord:
        if position is None:
            position = self.position
        marker = MarkerRecord(position=position, kind=kind, **fields)
        self.markers.append(marker)
        return marker

    def blank_line(self) -> None:
        """Emit a paragraph separator, collapsing runs of blank lines."""
        if self.chunks and not "".join(self.chunks[-2:]).endswith("\n\n"):
            self.emit("\n")


class MarkdownParser(DocumentParser):
    """Renders markdown to plain text and records where its structure lies.

    ATX headings become heading markers, ``{#id}`` heading attributes become
    anchors, list items become list markers and inline links become link
    markers whose text stays in the buffer.
    """

    name = "Markdown Files"
    extensions = ("md", "markdown", "mdown", "mkdn", "mkd")
    flags = ParserFlags.SUPPORTS_TOC | ParserFlags.SUPPORTS_LISTS

    # Regex patterns for parsing
    HEADING_PATTERN = re.compile(r"^\s{0,3}(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
    HEADING_ID_PATTERN = re.compile(r"\s*\{#([^\s}]+)\}$")
    FENCE_PATTERN = re.compile(r"^\s{0,3}(```|~~~)")
    THEMATIC_BREAK_PATTERN = re.compile(r"^\s{0,3}([-*_])(?:\s*\1){2,}\s*$")
    LIST_ITEM_PATTERN = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+(.*)$")
    BLOCKQUOTE_PATTERN = re.compile(r"^\s{0,3}>\s?")
    # Matches [text](url) and [text](url "title"); images are stripped first
    LINK_PATTERN = re.compile(r"\[([^\]]*)\]\(([^)\s]*)(?:\s+\"[^\"]*\")?\)")
    IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
    CODE_SPAN_PATTERN = re.compile(r"`([^`]*)`")
    STRONG_PATTERN = re.compile(r"(\*\*|__)(.+?)\1")
    EMPHASIS_PATTERN = re.compile(r"\*(?!\s)(.+?)\*")

    def parse(self, path: Path) -> NormalizedDocument:
        result = self.parse_content(self.read_text(path))
        if result.title is None:
            result.title = path.stem or "Untitled"
        return result

    def parse_content(self, content: str) -> NormalizedDocument:
        """Parse markdown source into normalized records.

        Returns:
            NormalizedDocument whose title is the first level-1 heading, or
            None if there is none.
        """
        out = _Output()
        ids: list[IdPosition] = []
        title: str | None = None
        in_code = False
        in_list = False

        for line in content.splitlines():
            if self.FENCE_PATTERN.match(line):
                in_code = not in_code
                continue
            if in_code:
                out.emit(line + "\n")
                continue

            line = self.BLOCKQUOTE_PATTERN.sub("", line)

            if not line.strip():
                in_list = False
                out.blank_line()
                continue

            if self.THEMATIC_BREAK_PATTERN.match(line):
                in_list = False
                out.mark(MarkerKind.SECTION_BREAK)
                continue

            heading = self.HEADING_PATTERN.match(line)
            if heading:
                in_list = False
                level, text, anchor = self._parse_heading(*heading.groups())
                if not text:
                    continue
                if level == 1 and title is None:
                    title = text
                if anchor:
                    ids.append(IdPosition(identifier=anchor, offset=out.position))
                out.mark(MarkerKind.HEADING, text=text, level=level)
                out.emit(text + "\n")
                continue

            item = self.LIST_ITEM_PATTERN.match(line)
            if item:
                if not in_list:
                    out.mark(MarkerKind.LIST)
                    in_list = True
                marker = out.mark(MarkerKind.LIST_ITEM)
                marker.text = self._emit_inline(out, item.group(1)) or None
                out.emit("\n")
                continue

            self._emit_inline(out, line.strip())
            out.emit("\n")

        return NormalizedDocument(
            title=title,
            content="".join(out.chunks),
            markers=out.markers,
            id_positions=ids,
        )

    def _parse_heading(self, hashes: str, text: str) -> tuple[int, str, str | None]:
        """Parse heading text to extract its anchor id.

        Returns:
            Tuple of (level, plain heading text, anchor id or None)
        """
        anchor: str | None = None
        id_match = self.HEADING_ID_PATTERN.search(text)
        if id_match:
            anchor = id_match.group(1)
            text = text[: id_match.start()]
        text = self.LINK_PATTERN.sub(r"\1", self._strip_formatting(text))
        return len(hashes), trim_string(collapse_whitespace(text)), anchor

    def _strip_formatting(self, text: str) -> str:
        """Remove images, code spans and emphasis, keeping their text."""
        text = self.IMAGE_PATTERN.sub(r"\1", text)
        text = self.CODE_SPAN_PATTERN.sub(r"\1", text)
        text = self.STRONG_PATTERN.sub(r"\2", text)
        return self.EMPHASIS_PATTERN.sub(r"\1", text)

    def _emit_inline(self, out: _Output, text: str) -> str:
        """Emit one line of inline markdown and return the rendered text.

        Link text stays in the buffer, with a link marker at its start.
        """
        text = self._strip_formatting(text)
        parts: list[str] = []
        length = 0
        last = 0
        for match in self.LINK_PATTERN.finditer(text):
            before = text[last : match.start()]
            parts.append(before)
            length += len(before)
            link_text, url = match.groups()
            link_text = collapse_whitespace(link_text)
            out.mark(
                MarkerKind.LINK,
                position=out.position + length,
                text=link_text,
                reference=url_decode(url),
            )
            parts.append(link_text)
            length += len(link_text)
            last = match.end()
        parts.append(text[last:])
        rendered = "".join(parts)
        out.emit(rendered)
        return rendered
