"""Version information for docnav.

The version is statically defined here and should match pyproject.toml.
"""

from collections.abc import Iterable

__version__ = "0.1.0"


def get_version() -> str:
    """Get the version string."""
    return __version__


def get_full_version_string(formats: Iterable[str] = ()) -> str:
    """Get a human-readable version string listing the readable formats.

    Args:
        formats: File extensions docnav can open, without the leading dot

    Returns:
        String like "docnav 0.1.0" or "docnav 0.1.0 (formats: md, txt)"
    """
    formats = sorted(set(formats))
    if not formats:
        return f"docnav {__version__}"
    return f"docnav {__version__} (formats: {', '.join(formats)})"
