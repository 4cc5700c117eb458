"""
File filtering utilities for gitmerge.

This module decides which tree entries are eligible for aggregation and
holds the user-adjustable selection state over the eligible entries.
"""

import fnmatch
from typing import Iterable, Iterator, List, Optional

from ..core.models import Config, TreeEntry

# Version-control metadata, dependency directories and known lockfiles
DENYLIST_SUBSTRINGS = ('.git/', 'node_modules/', 'package-lock.json', 'yarn.lock')


def get_extension(path: str) -> str:
    """Return the lowercased substring from the last '.' to the end, or '' if none."""
    index = path.rfind('.')
    if index == -1:
        return ''
    return path[index:].lower()


class FileFilter:
    """Handles file filtering logic."""
    
    def __init__(self, config: Config):
        self.config = config
        self.ignore_extensions = [ext.lower() for ext in config.ignore_extensions]
    
    def has_ignored_extension(self, path: str) -> bool:
        """
        Check if a path's extension is in the ignore set.
        
        Plain extensions ('.png') are compared against the path's extension.
        Compound suffixes that do not start with '.' ('-lock.json') are
        matched against the end of the path.
        """
        ext = get_extension(path)
        if ext and ext in self.ignore_extensions:
            return True
        lowered = path.lower()
        return any(
            not suffix.startswith('.') and lowered.endswith(suffix)
            for suffix in self.ignore_extensions
            if suffix
        )
    
    @staticmethod
    def is_denylisted(path: str) -> bool:
        """Check if a path contains a denylisted directory or lockfile name."""
        return any(marker in path for marker in DENYLIST_SUBSTRINGS)
    
    def classify(self, entry: TreeEntry) -> bool:
        """
        Check if an entry is eligible for aggregation.
        
        Args:
            entry: Tree entry from the remote listing.
            
        Returns:
            True if the entry is a blob that passes all filters.
        """
        if not entry.is_blob:
            return False
        if self.has_ignored_extension(entry.path):
            return False
        if self.is_denylisted(entry.path):
            return False
        return True
    
    def filter_entries(self, entries: Iterable[TreeEntry]) -> List[TreeEntry]:
        """Keep eligible entries in listing order."""
        return [entry for entry in entries if self.classify(entry)]
    
    def get_excluded_reason(self, entry: TreeEntry) -> Optional[str]:
        """
        Get the reason why an entry would be excluded.
        
        Returns:
            Reason string if the entry would be excluded, None otherwise.
        """
        if not entry.is_blob:
            return "Not a file"
        if self.has_ignored_extension(entry.path):
            return "Ignored extension"
        if self.is_denylisted(entry.path):
            return "Denylisted path"
        return None


class FileSelection:
    """Ordered selection state over the eligible entries of one listing.
    
    Entries are never added, removed or reordered; only ``selected`` changes.
    """
    
    def __init__(self, entries: Iterable[TreeEntry] = ()):
        self._entries: List[TreeEntry] = list(entries)
    
    def __iter__(self) -> Iterator[TreeEntry]:
        return iter(self._entries)
    
    def __len__(self) -> int:
        return len(self._entries)
    
    @property
    def entries(self) -> List[TreeEntry]:
        return list(self._entries)
    
    @property
    def selected_count(self) -> int:
        return sum(1 for entry in self._entries if entry.selected)
    
    def toggle_one(self, path: str) -> None:
        """Flip ``selected`` on the entry with the given path."""
        for entry in self._entries:
            if entry.path == path:
                entry.selected = not entry.selected
                return
        raise KeyError(path)
    
    def toggle_all(self, value: bool) -> None:
        """Set ``selected`` on every entry."""
        for entry in self._entries:
            entry.selected = value
    
    def select_matching(self, patterns: Iterable[str], value: bool) -> int:
        """
        Set ``selected`` on entries whose path matches any glob pattern.
        
        Returns:
            Number of entries matched.
        """
        patterns = list(patterns)
        matched = 0
        for entry in self._entries:
            if any(fnmatch.fnmatchcase(entry.path, pattern) for pattern in patterns):
                entry.selected = value
                matched += 1
        return matched
    
    def selected_entries(self) -> List[TreeEntry]:
        """Selected entries in listing order."""
        return [entry for entry in self._entries if entry.selected]
