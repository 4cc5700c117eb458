import pytest

from gitmerge.core.models import (
    Config,
    DEFAULT_IGNORE_EXTENSIONS,
    FetchedFile,
    MergeProgress,
    MergeResult,
    RepositoryRef,
    TreeEntry,
)


class TestConfig:
    def test_defaults(self):
        config = Config(github_token="")
        assert config.batch_size == 5
        assert config.expected_host == "github.com"
        assert config.ignore_extensions == DEFAULT_IGNORE_EXTENSIONS

    def test_ignore_extensions_not_shared(self):
        first = Config()
        first.ignore_extensions.append(".foo")
        assert ".foo" not in Config().ignore_extensions

    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        assert Config().github_token == "env-token"


class TestRepositoryRef:
    def test_with_branch_returns_new_ref(self):
        ref = RepositoryRef("octo", "demo")
        resolved = ref.with_branch("main")
        assert ref.branch == ""
        assert resolved == RepositoryRef("octo", "demo", "main")

    def test_is_immutable(self):
        ref = RepositoryRef("octo", "demo", "main")
        with pytest.raises(Exception):
            ref.branch = "dev"

    def test_full_name(self):
        assert RepositoryRef("octo", "demo").full_name == "octo/demo"


class TestTreeEntry:
    def test_from_api_blob(self):
        entry = TreeEntry.from_api({"path": "a/b.py", "type": "blob", "size": 12, "url": "u"})
        assert entry.path == "a/b.py"
        assert entry.is_blob
        assert entry.size == 12
        assert entry.content_ref == "u"
        assert entry.selected is True

    def test_from_api_tree_has_no_size(self):
        entry = TreeEntry.from_api({"path": "a", "type": "tree", "url": "u"})
        assert not entry.is_blob
        assert entry.size is None


class TestMergeResult:
    def test_output_filename(self):
        result = MergeResult(repo=RepositoryRef("octo", "demo", "main"), document="")
        assert result.output_filename == "demo-main-merged.txt"

    def test_estimated_tokens_and_size(self):
        result = MergeResult(repo=RepositoryRef("o", "r", "b"), document="a" * 2048)
        assert result.estimated_tokens == 512
        assert result.size_kb == 2.0

    def test_total_files(self):
        files = [FetchedFile("a", "1"), FetchedFile("b", "2")]
        result = MergeResult(repo=RepositoryRef("o", "r", "b"), document="", files=files)
        assert result.total_files == 2


class TestMergeProgress:
    def test_done_and_percentage(self):
        progress = MergeProgress(completed=5, total=10)
        assert not progress.done
        assert progress.percentage == 50.0
        assert MergeProgress(10, 10).done

    def test_empty_run_is_complete(self):
        assert MergeProgress().percentage == 100.0
