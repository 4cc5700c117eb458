import pytest

from gitmerge.core.models import Config, TreeEntry
from gitmerge.utils.file_filter import FileFilter, FileSelection, get_extension


def blob(path):
    return TreeEntry(path=path, kind="blob", content_ref=f"ref:{path}")


class TestGetExtension:
    @pytest.mark.parametrize("path,expected", [
        ("src/main.py", ".py"),
        ("IMAGE.PNG", ".png"),
        ("archive.tar.gz", ".gz"),
        ("Makefile", ""),
        ("dir.d/Makefile", ".d/makefile"),
        (".gitignore", ".gitignore"),
    ])
    def test_extension(self, path, expected):
        assert get_extension(path) == expected


class TestFileFilter:
    @pytest.fixture
    def file_filter(self):
        return FileFilter(Config(github_token=""))

    def test_non_blob_excluded(self, file_filter):
        assert not file_filter.classify(TreeEntry(path="src", kind="tree"))

    @pytest.mark.parametrize("path", ["logo.png", "logo.PNG", "docs/Manual.Pdf", "lib/x.pyc", "Cargo.lock"])
    def test_ignored_extensions_case_insensitive(self, file_filter, path):
        assert not file_filter.classify(blob(path))

    def test_compound_suffix(self, file_filter):
        assert not file_filter.classify(blob("pnpm-lock.json"))
        assert file_filter.classify(blob("config.json"))

    @pytest.mark.parametrize("path", [
        ".git/config",
        "sub/.git/HEAD",
        "node_modules/left-pad/index.js",
        "web/node_modules/x/y.ts",
        "package-lock.json",
        "frontend/yarn.lock",
    ])
    def test_denylisted_paths(self, file_filter, path):
        assert not file_filter.classify(blob(path))

    @pytest.mark.parametrize("path", ["src/main.py", "README.md", "Makefile", ".github/workflows/ci.yml", ".gitignore"])
    def test_eligible(self, file_filter, path):
        assert file_filter.classify(blob(path))

    def test_custom_ignore_extensions(self):
        file_filter = FileFilter(Config(github_token="", ignore_extensions=[".MD"]))
        assert not file_filter.classify(blob("README.md"))
        assert file_filter.classify(blob("logo.png"))

    def test_filter_entries_keeps_order(self, file_filter):
        entries = [blob("b.py"), blob("a.png"), blob("a.py"), TreeEntry(path="d", kind="tree")]
        assert [e.path for e in file_filter.filter_entries(entries)] == ["b.py", "a.py"]

    def test_excluded_reason(self, file_filter):
        assert file_filter.get_excluded_reason(TreeEntry(path="d", kind="tree")) == "Not a file"
        assert file_filter.get_excluded_reason(blob("a.png")) == "Ignored extension"
        assert file_filter.get_excluded_reason(blob("node_modules/a.js")) == "Denylisted path"
        assert file_filter.get_excluded_reason(blob("a.js")) is None


class TestFileSelection:
    @pytest.fixture
    def selection(self):
        return FileSelection([blob("a.py"), blob("b/c.py"), blob("d.md")])

    def test_all_selected_initially(self, selection):
        assert selection.selected_count == 3

    def test_toggle_one(self, selection):
        selection.toggle_one("b/c.py")
        assert [e.path for e in selection.selected_entries()] == ["a.py", "d.md"]
        selection.toggle_one("b/c.py")
        assert selection.selected_count == 3

    def test_toggle_one_unknown_path(self, selection):
        with pytest.raises(KeyError):
            selection.toggle_one("missing.py")

    def test_toggle_all_preserves_order_and_identity(self, selection):
        before = selection.entries
        selection.toggle_all(True)
        selection.toggle_all(False)
        after = selection.entries
        assert all(not e.selected for e in after)
        assert len(after) == len(before)
        assert all(a is b for a, b in zip(before, after))
        assert [e.content_ref for e in after] == ["ref:a.py", "ref:b/c.py", "ref:d.md"]

    def test_select_matching(self, selection):
        selection.toggle_all(False)
        assert selection.select_matching(["*.py"], True) == 2
        assert [e.path for e in selection.selected_entries()] == ["a.py", "b/c.py"]

    def test_select_matching_deselect(self, selection):
        selection.select_matching(["b/*"], False)
        assert [e.path for e in selection.selected_entries()] == ["a.py", "d.md"]

    def test_len_and_iter(self, selection):
        assert len(selection) == 3
        assert [e.path for e in selection] == ["a.py", "b/c.py", "d.md"]
