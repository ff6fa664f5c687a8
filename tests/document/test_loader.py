"""Tests for building documents from normalized records."""

import logging

import pytest

from docnav.document.loader import NoContentError, build_document
from docnav.document.markers import MarkerKind
from docnav.document.model import TocItem
from docnav.document.records import (
    MarkerRecord,
    NormalizedDocument,
    StatsRecord,
    TocRecord,
)


class TestBuildFromHeadings:
    """Documents without a native TOC derive it from heading markers."""

    def test_markers_are_sorted(self, heading_records):
        doc = build_document(heading_records)

        assert doc.buffer.is_finalized
        assert [m.text for m in doc.buffer.markers] == ["Intro", "Chapter One", "Section A"]

    def test_toc_from_headings(self, heading_records):
        doc = build_document(heading_records)

        content = heading_records.content
        assert doc.toc_items == [
            TocItem(name="Intro", offset=0),
            TocItem(
                name="Chapter One",
                offset=content.index("Chapter One"),
                children=[TocItem(name="Section A", offset=content.index("Section A"))],
            ),
        ]

    def test_stats_computed_when_absent(self, heading_records):
        doc = build_document(heading_records)

        assert doc.stats.word_count == 10
        assert doc.stats.line_count == 6
        assert doc.stats.char_count == len(heading_records.content)

    def test_metadata(self, heading_records):
        doc = build_document(heading_records)
        assert doc.title == "Headings Only"
        assert doc.author is None


class TestBuildFromNativeToc:
    """Documents with a native TOC use it and clean it up."""

    def test_native_toc_is_cleaned_up(self, native_toc_records):
        doc = build_document(native_toc_records)

        content = native_toc_records.content
        ch1 = content.index("Chapter 1")
        ch2 = content.index("Chapter 2")
        assert doc.toc_items == [
            TocItem(
                name="Part One",
                reference="ch1.xhtml",
                offset=ch1,
                children=[TocItem(name="Chapter 2", reference="ch2.xhtml#start", offset=ch2)],
            )
        ]

    def test_cleanup_can_be_disabled(self, native_toc_records):
        doc = build_document(native_toc_records, cleanup=False)

        assert len(doc.toc_items) == 1
        assert [c.name for c in doc.toc_items[0].children] == ["Part One", "Chapter 2"]
        assert doc.toc_items[0].reference is None

    def test_headings_ignored_when_native_toc_present(self, native_toc_records):
        native_toc_records.markers.append(
            MarkerRecord(position=0, kind=MarkerKind.HEADING, text="Ignored", level=1)
        )
        doc = build_document(native_toc_records)
        assert "Ignored" not in [i.name for i in doc.get_all_toc_items()]

    def test_empty_native_toc_stays_empty(self, native_toc_records):
        native_toc_records.toc_records = []
        native_toc_records.markers.append(
            MarkerRecord(position=0, kind=MarkerKind.HEADING, text="Heading", level=1)
        )
        doc = build_document(native_toc_records)
        assert doc.toc_items == []

    def test_out_of_range_depth_is_skipped(self, native_toc_records):
        native_toc_records.toc_records.append(TocRecord(name="Too deep", depth=40))
        native_toc_records.toc_records.append(TocRecord(name="Epilogue", depth=0))

        doc = build_document(native_toc_records)

        assert [i.name for i in doc.toc_items] == ["Part One", "Epilogue"]

    def test_max_depth(self, native_toc_records):
        doc = build_document(native_toc_records, max_depth=0, cleanup=False)
        assert [i.name for i in doc.get_all_toc_items()] == ["Part One"]

    def test_id_positions_later_duplicate_wins(self, native_toc_records):
        doc = build_document(native_toc_records)

        content = native_toc_records.content
        assert doc.id_positions == {
            "start": content.index("Chapter 2"),
            "intro": content.index("Chapter 1"),
        }

    def test_spine_and_manifest(self, native_toc_records):
        doc = build_document(native_toc_records)

        assert doc.spine_items == ["ch1", "ch2"]
        assert doc.manifest_items == {"ch1": "OEBPS/ch1.xhtml", "ch2": "OEBPS/ch2.xhtml"}
        assert doc.resolve_reference("ch2.xhtml") == native_toc_records.content.index("Chapter 2")

    def test_supplied_stats_pass_through(self, native_toc_records):
        native_toc_records.stats = StatsRecord(word_count=999, line_count=5, char_count=1)
        doc = build_document(native_toc_records)
        assert doc.stats.word_count == 999
        assert doc.stats.char_count == 1

    def test_toc_is_attached(self, native_toc_records):
        doc = build_document(native_toc_records)
        with pytest.raises(RuntimeError):
            doc.attach_toc([])


class TestNoContent:
    """Documents without usable text are rejected."""

    @pytest.mark.parametrize("content", ["", "   ", "\n\t  \n"])
    def test_rejects_blank_content(self, content, caplog):
        records = NormalizedDocument(title="Blank", content=content)

        with caplog.at_level(logging.WARNING, logger="docnav.document.loader"):
            with pytest.raises(NoContentError):
                build_document(records)

        assert "no content" in caplog.text

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            build_document(NormalizedDocument(content=""))

    def test_markers_without_content_still_rejected(self):
        records = NormalizedDocument(
            content="",
            markers=[MarkerRecord(position=0, kind=MarkerKind.HEADING, text="H", level=1)],
        )
        with pytest.raises(NoContentError):
            build_document(records)
