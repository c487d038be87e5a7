"""
Code Bundler

Concatenates source files from a directory tree into a single text bundle,
with language filtering, ordering, source-path notes, empty-line removal
and an author header. An interactive wizard writes reusable response files.
"""

__version__ = "1.0.0"

from bundler.bundler import Bundler, BundleResult
from bundler.config.schema import BundleConfig, SortMode
from bundler.errors import BundleError, BundleErrorInfo

__all__ = [
    "Bundler",
    "BundleResult",
    "BundleConfig",
    "SortMode",
    "BundleError",
    "BundleErrorInfo",
]
