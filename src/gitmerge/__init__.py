"""gitmerge: merge a GitHub repository's text files into one annotated document."""

__version__ = "0.1.0"

from .core import Config, MergeResult, RepositoryRef, TreeEntry
from .core.analyzer import RepositoryAnalyzer

__all__ = ["Config", "MergeResult", "RepositoryRef", "TreeEntry", "RepositoryAnalyzer", "__version__"]
