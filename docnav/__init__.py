"""docnav - navigable document model: table of contents, anchors and text search."""

from docnav._version import __version__

__all__ = ["__version__"]
