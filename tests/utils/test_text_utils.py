"""Tests for text normalization helpers."""

import codecs

import pytest

from docnav.utils.text import (
    SOFT_HYPHEN,
    collapse_whitespace,
    compute_stats,
    convert_to_utf8,
    remove_soft_hyphens,
    trim_string,
    url_decode,
)


class TestRemoveSoftHyphens:
    """Tests for remove_soft_hyphens."""

    def test_removes_all(self):
        assert remove_soft_hyphens(f"ex{SOFT_HYPHEN}am{SOFT_HYPHEN}ple") == "example"

    def test_keeps_regular_hyphens(self):
        assert remove_soft_hyphens("well-known") == "well-known"


class TestUrlDecode:
    """Tests for url_decode."""

    @pytest.mark.parametrize(
        "encoded,expected",
        [
            ("chapter%201.xhtml", "chapter 1.xhtml"),
            ("a+b", "a b"),
            ("caf%C3%A9", "café"),
            ("plain", "plain"),
            ("100%", "100%"),
        ],
    )
    def test_decode(self, encoded, expected):
        assert url_decode(encoded) == expected

    def test_invalid_utf8_is_replaced(self):
        assert url_decode("bad%FFbyte") == "bad\ufffdbyte"


class TestWhitespace:
    """Tests for collapse_whitespace and trim_string."""

    def test_collapse_runs(self):
        assert collapse_whitespace("a  b\t\tc\n\nd") == "a b c d"

    def test_collapse_keeps_single_edges(self):
        assert collapse_whitespace("  a  ") == " a "

    def test_collapse_non_breaking_space(self):
        assert collapse_whitespace("a\u00a0 b") == "a b"

    def test_trim(self):
        assert trim_string("  padded \n") == "padded"
        assert trim_string("   ") == ""


class TestComputeStats:
    """Tests for compute_stats."""

    def test_counts(self):
        assert compute_stats("The quick fox.\nJumps over\n\nthe dog") == (7, 4, 34)

    def test_empty(self):
        assert compute_stats("") == (0, 0, 0)

    def test_trailing_newline_does_not_add_line(self):
        assert compute_stats("one\n")[1] == 1


class TestConvertToUtf8:
    """Tests for decoding raw bytes."""

    def test_plain_utf8(self):
        assert convert_to_utf8("naïve".encode()) == "naïve"

    def test_utf8_bom_stripped(self):
        assert convert_to_utf8(codecs.BOM_UTF8 + b"text") == "text"

    @pytest.mark.parametrize(
        "bom,encoding",
        [
            (codecs.BOM_UTF16_LE, "utf-16-le"),
            (codecs.BOM_UTF16_BE, "utf-16-be"),
            (codecs.BOM_UTF32_LE, "utf-32-le"),
            (codecs.BOM_UTF32_BE, "utf-32-be"),
        ],
    )
    def test_bom_selects_encoding(self, bom, encoding):
        assert convert_to_utf8(bom + "Ünïcode".encode(encoding)) == "Ünïcode"

    def test_cp1252_fallback(self):
        assert convert_to_utf8(b"\x93quoted\x94 \x80") == "“quoted” €"

    def test_undefined_cp1252_byte_is_replaced(self):
        assert convert_to_utf8(b"\xe9\x81") == "é\ufffd"
