"""CLI entry point for docnav.

Usage:
    python -m docnav toc book.md                  # Show the table of contents
    python -m docnav find book.md "whale"         # Find the first match
    python -m docnav find book.md "whale" --all   # List every match
    python -m docnav info book.md                 # Title, author and statistics

Or via the installed command:
    docnav toc records.json                       # Normalized records work too
    docnav find notes.txt "colou?r" --regex       # Pattern search
    docnav find notes.txt "cat" -w --start 120 -b # Whole-word, backward from 120
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from docnav._version import get_full_version_string
from docnav.config import DocnavConfig, find_config_root, load_config
from docnav.document.loader import NoContentError
from docnav.document.model import Document, TocItem
from docnav.document.records import RECORD_SUFFIXES
from docnav.document.search import FindOptions, find_all, find_text, match_length
from docnav.parsers import ParserError, ParserRegistry, load_document

# Load environment variables
load_dotenv()

console = Console()

# Characters of context shown on each side of a match
CONTEXT_CHARS = 30


def supported_formats() -> list[str]:
    """File extensions that can be opened: parser formats plus records files."""
    registry = ParserRegistry.global_registry()
    extensions = [ext for info in registry.all_parsers() for ext in info.extensions]
    return extensions + [suffix.lstrip(".") for suffix in RECORD_SUFFIXES]


def configure_logging() -> None:
    """Configure logging from LOG_LEVEL (default WARNING)."""
    level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def open_document(path: Path, config: DocnavConfig) -> Document | None:
    """Load a document, printing the error and returning None on failure."""
    try:
        return load_document(path, cleanup=config.toc.cleanup, max_depth=config.toc.max_depth)
    except ParserError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
    except NoContentError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}: {escape(str(path))}")
    return None


def _add_toc_nodes(tree: Tree, items: list[TocItem]) -> None:
    # Explicit stack; TOC nesting is unbounded
    stack = [(tree, item) for item in reversed(items)]
    while stack:
        parent, item = stack.pop()
        label = f"{escape(item.name)} [dim]@{item.offset}[/]"
        if item.reference:
            label += f" [cyan]{escape(item.reference)}[/]"
        node = parent.add(label)
        stack.extend((node, child) for child in reversed(item.children))


def run_toc(path: Path, config: DocnavConfig) -> int:
    """Print the table of contents tree.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    doc = open_document(path, config)
    if doc is None:
        return 1

    if not doc.toc_items:
        console.print("[yellow]No table of contents[/]")
        return 0

    tree = Tree(f"[bold blue]{escape(doc.title or path.name)}[/]")
    _add_toc_nodes(tree, doc.toc_items)
    console.print(tree)
    return 0


def _line_number(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def _print_match(text: str, offset: int, length: int) -> None:
    start = max(0, offset - CONTEXT_CHARS)
    end = min(len(text), offset + length + CONTEXT_CHARS)
    before = text[start:offset].replace("\n", " ")
    match = text[offset : offset + length].replace("\n", " ")
    after = text[offset + length : end].replace("\n", " ")
    console.print(
        f"[green]{offset}[/] [dim](line {_line_number(text, offset)})[/] "
        f"{escape(before)}[bold yellow]{escape(match)}[/]{escape(after)}"
    )


def run_find(
    path: Path,
    needle: str,
    options: FindOptions,
    config: DocnavConfig,
    *,
    start: int | None = None,
    find_every: bool = False,
) -> int:
    """Search a document and print the matching offsets.

    Returns:
        Exit code (0 when something matched, 1 on error or no match)
    """
    doc = open_document(path, config)
    if doc is None:
        return 1

    text = doc.text

    if find_every:
        offsets = list(find_all(text, needle, options))
    else:
        if start is None:
            start = 0 if FindOptions.FORWARD in options else len(text)
        found = find_text(text, needle, start, options)
        offsets = [] if found is None else [found]

    if not offsets:
        console.print(f"[yellow]Not found:[/] {escape(needle)}")
        return 1

    for offset in offsets:
        _print_match(text, offset, match_length(text, needle, offset, options))
    if find_every:
        console.print(f"[dim]{len(offsets)} match(es)[/]")
    return 0


def run_info(path: Path, config: DocnavConfig) -> int:
    """Print document metadata and statistics.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    doc = open_document(path, config)
    if doc is None:
        return 1

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Title", escape(doc.title or "-"))
    table.add_row("Author", escape(doc.author or "-"))
    table.add_row("Words", str(doc.stats.word_count))
    table.add_row("Lines", str(doc.stats.line_count))
    table.add_row("Characters", str(doc.stats.char_count))
    table.add_row("Headings", str(len(doc.buffer.get_heading_markers())))
    table.add_row("TOC entries", str(len(doc.get_all_toc_items())))
    table.add_row("Anchors", str(len(doc.id_positions)))
    console.print(Panel(table, title=escape(path.name), expand=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="docnav",
        description="docnav - Navigate documents: table of contents and text search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  docnav toc book.md                     Show the table of contents
  docnav find book.md whale --all        List every match
  docnav find book.md "wh(ale|ite)" -r   Pattern search
  docnav info records.yaml               Metadata of a normalized records file

Configuration:
  Create .docnav/config.toml to change the defaults:
    [search]
    match_case = false
    whole_word = false
    use_regex = false

    [toc]
    cleanup = true
    max_depth = 32
""",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    # Toc subcommand
    toc_parser = subparsers.add_parser("toc", help="Show the table of contents")
    toc_parser.add_argument("file", type=Path, help="Document or normalized records file")
    toc_parser.add_argument(
        "--no-cleanup",
        action="store_true",
        help="Keep redundant self-titled TOC wrapper entries",
    )

    # Find subcommand
    find_parser = subparsers.add_parser("find", help="Search the document text")
    find_parser.add_argument("file", type=Path, help="Document or normalized records file")
    find_parser.add_argument("needle", help="Text or pattern to find")
    find_parser.add_argument(
        "--start",
        "-s",
        type=int,
        default=None,
        help="Offset to search from (default: start, or end when searching backward)",
    )
    find_parser.add_argument(
        "--backward",
        "-b",
        action="store_true",
        help="Find the last match before the start offset",
    )
    find_parser.add_argument(
        "--match-case",
        "-c",
        action="store_true",
        default=None,
        help="Case-sensitive search",
    )
    find_parser.add_argument(
        "--whole-word",
        "-w",
        action="store_true",
        default=None,
        help="Only match whole words",
    )
    find_parser.add_argument(
        "--regex",
        "-r",
        action="store_true",
        default=None,
        help="Treat the needle as a regular expression",
    )
    find_parser.add_argument(
        "--all",
        "-a",
        dest="find_every",
        action="store_true",
        help="List every match instead of the first",
    )

    # Info subcommand
    info_parser = subparsers.add_parser("info", help="Show document metadata and statistics")
    info_parser.add_argument("file", type=Path, help="Document or normalized records file")

    args = parser.parse_args(argv)

    if args.version:
        console.print(get_full_version_string(supported_formats()), highlight=False, soft_wrap=True)
        return 0

    if not args.command:
        parser.error("a command is required")

    configure_logging()
    config = load_config(find_config_root(Path.cwd()))

    if args.command == "toc":
        if args.no_cleanup:
            config.toc.cleanup = False
        return run_toc(args.file, config)

    if args.command == "info":
        return run_info(args.file, config)

    options = config.get_find_options(
        backward=args.backward,
        match_case=args.match_case,
        whole_word=args.whole_word,
        use_regex=args.regex,
    )
    return run_find(
        args.file,
        args.needle,
        options,
        config,
        start=args.start,
        find_every=args.find_every,
    )


if __name__ == "__main__":
    sys.exit(main())
