"""Utility modules for gitmerge."""

from .comments import strip_comments
from .file_filter import FileFilter, FileSelection, get_extension
from .tree_builder import DirNode, FileNode, build_tree, generate_ascii_tree

__all__ = [
    "FileFilter",
    "FileSelection",
    "get_extension",
    "strip_comments",
    "DirNode",
    "FileNode",
    "build_tree",
    "generate_ascii_tree",
]
