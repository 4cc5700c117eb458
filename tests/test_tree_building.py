"""Tests for path tree building and ASCII rendering."""

from gitmerge.utils.tree_builder import (
    TREE_RULE,
    DirNode,
    FileNode,
    build_tree,
    generate_ascii_tree,
    render_tree,
)


class TestBuildTree:
    def test_nested_structure(self):
        root = build_tree(["a/b.txt", "a/c/d.txt", "e.txt"])
        assert isinstance(root.children["a"], DirNode)
        assert isinstance(root.children["e.txt"], FileNode)
        assert isinstance(root.children["a"].children["c"], DirNode)
        assert isinstance(root.children["a"].children["c"].children["d.txt"], FileNode)

    def test_directory_wins_over_leaf(self):
        root = build_tree(["docs", "docs/index.md"])
        assert isinstance(root.children["docs"], DirNode)
        root = build_tree(["docs/index.md", "docs"])
        assert isinstance(root.children["docs"], DirNode)
        assert "index.md" in root.children["docs"].children

    def test_duplicate_paths(self):
        root = build_tree(["a.txt", "a.txt"])
        assert list(root.children) == ["a.txt"]

    def test_empty(self):
        assert build_tree([]).children == {}


class TestRenderTree:
    def test_directories_before_files(self):
        lines = render_tree(build_tree(["z.txt", "b/x.txt", "a.txt"]))
        assert lines == ["├── b", "│   └── x.txt", "├── a.txt", "└── z.txt"]

    def test_case_sensitive_order(self):
        lines = render_tree(build_tree(["b.txt", "B.txt", "a.txt"]))
        assert lines == ["├── B.txt", "├── a.txt", "└── b.txt"]


class TestGenerateAsciiTree:
    def test_example_layout(self):
        output = generate_ascii_tree(["a/b.txt", "a/c/d.txt", "e.txt"])
        expected = (
            "Project Structure:\n"
            "├── a\n"
            "│   ├── c\n"
            "│   │   └── d.txt\n"
            "│   └── b.txt\n"
            "└── e.txt\n"
            "\n"
            + "=" * 50 + "\n\n"
        )
        assert output == expected

    def test_rule_width(self):
        assert TREE_RULE == "=" * 50

    def test_no_paths(self):
        assert generate_ascii_tree([]) == "Project Structure:\n\n" + "=" * 50 + "\n\n"
