"""docnav configuration management.

Loads configuration from .docnav/config.toml if present, with sensible defaults.
Configuration hierarchy (highest priority first):
1. Command-line flags
2. Repo-level config (.docnav/config.toml)
3. Defaults
"""

from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found]

from docnav.document.search import FindOptions
from docnav.document.toc import MAX_TOC_DEPTH

CONFIG_DIR = ".docnav"
CONFIG_FILE = "config.toml"


@dataclass
class SearchConfig:
    """Default search options."""

    match_case: bool = False
    whole_word: bool = False
    use_regex: bool = False


@dataclass
class TocConfig:
    """Table of contents assembly options."""

    cleanup: bool = True
    max_depth: int = MAX_TOC_DEPTH


@dataclass
class DocnavConfig:
    """docnav configuration."""

    search: SearchConfig = field(default_factory=SearchConfig)
    toc: TocConfig = field(default_factory=TocConfig)

    def get_find_options(
        self,
        *,
        backward: bool = False,
        match_case: bool | None = None,
        whole_word: bool | None = None,
        use_regex: bool | None = None,
    ) -> FindOptions:
        """Combine CLI flags with configured defaults into search options.

        Args:
            backward: Search backward instead of forward.
            match_case: CLI override for case sensitivity.
            whole_word: CLI override for whole-word matching.
            use_regex: CLI override for pattern search.

        Returns:
            FindOptions flags for find_text.
        """
        options = FindOptions.NONE if backward else FindOptions.FORWARD
        if match_case if match_case is not None else self.search.match_case:
            options |= FindOptions.MATCH_CASE
        if whole_word if whole_word is not None else self.search.whole_word:
            options |= FindOptions.MATCH_WHOLE_WORD
        if use_regex if use_regex is not None else self.search.use_regex:
            options |= FindOptions.USE_REGEX
        return options


def load_config(workspace: Path) -> DocnavConfig:
    """Load configuration from .docnav/config.toml if it exists.

    Args:
        workspace: Directory holding the .docnav/ folder.

    Returns:
        DocnavConfig with values from config file or defaults.
    """
    config_path = workspace / CONFIG_DIR / CONFIG_FILE

    if not config_path.exists():
        return DocnavConfig()

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    search_data = data.get("search", {})
    toc_data = data.get("toc", {})

    search = SearchConfig(
        match_case=search_data.get("match_case", False),
        whole_word=search_data.get("whole_word", False),
        use_regex=search_data.get("use_regex", False),
    )

    toc = TocConfig(
        cleanup=toc_data.get("cleanup", True),
        max_depth=toc_data.get("max_depth", MAX_TOC_DEPTH),
    )

    return DocnavConfig(search=search, toc=toc)


def find_config_root(start_path: Path) -> Path:
    """Find the nearest directory containing .docnav/, searching upward.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to that directory, or start_path if none is found
    """
    current = start_path.resolve()
    while current != current.parent:
        if (current / CONFIG_DIR).is_dir():
            return current
        current = current.parent
    return start_path
