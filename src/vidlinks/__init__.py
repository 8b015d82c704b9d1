"""vidlinks — persistent registry of network video links.

Adds, deduplicates, enriches, sorts, searches and durably stores
metadata records describing user-supplied video URLs.
"""

from vidlinks.version import __version__

__all__: list[str] = ["__version__"]
