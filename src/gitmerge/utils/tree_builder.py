"""Directory tree building and ASCII rendering utilities."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union

TREE_TITLE = "Project Structure:"
TREE_RULE = "=" * 50


@dataclass
class FileNode:
    """Leaf in a path tree."""


@dataclass
class DirNode:
    """Directory in a path tree."""
    
    children: Dict[str, Union['DirNode', FileNode]] = field(default_factory=dict)
    
    def sorted_children(self) -> List[tuple]:
        """Children with directories first, each group in plain string order."""
        dirs = sorted(
            ((name, node) for name, node in self.children.items() if isinstance(node, DirNode)),
            key=lambda item: item[0],
        )
        files = sorted(
            ((name, node) for name, node in self.children.items() if isinstance(node, FileNode)),
            key=lambda item: item[0],
        )
        return dirs + files


Node = Union[DirNode, FileNode]


def build_tree(paths: Iterable[str]) -> DirNode:
    """
    Build a nested DirNode tree from slash-separated paths.
    
    A segment is a directory if it is not the last segment of its path.
    When a name is seen both as a file and as a directory, the directory wins.
    """
    root = DirNode()
    for path in paths:
        parts = [part for part in path.split('/') if part]
        current = root
        for index, part in enumerate(parts):
            is_leaf = index == len(parts) - 1
            existing = current.children.get(part)
            if is_leaf:
                if existing is None:
                    current.children[part] = FileNode()
                break
            if not isinstance(existing, DirNode):
                existing = DirNode()
                current.children[part] = existing
            current = existing
    return root


def render_tree(node: DirNode, prefix: str = "") -> List[str]:
    """Render a DirNode's children as box-drawing lines."""
    lines = []
    children = node.sorted_children()
    for index, (name, child) in enumerate(children):
        is_last = index == len(children) - 1
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{name}")
        if isinstance(child, DirNode):
            extension = "    " if is_last else "│   "
            lines.extend(render_tree(child, prefix + extension))
    return lines


def generate_ascii_tree(paths: Iterable[str]) -> str:
    """
    Generate an ASCII tree of the given file paths.
    
    The output starts with a title line and ends with a rule line
    followed by a blank line, ready to be prepended to a merged document.
    """
    lines = render_tree(build_tree(paths))
    body = "".join(f"{line}\n" for line in lines)
    return f"{TREE_TITLE}\n{body}\n{TREE_RULE}\n\n"
