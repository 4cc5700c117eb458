import pytest

from gitmerge.core.models import Config

from fakes import API, FakeResponse, FakeSession, blob_response, blob_url, tree_item


@pytest.fixture
def config():
    """Configuration with no credentials taken from the environment."""
    return Config(github_token="", llm_api_key="test-key")


@pytest.fixture
def demo_repo_session():
    """Session serving a small repository 'octo/demo' on branch 'main'."""
    items = [
        tree_item("src", kind="tree"),
        tree_item("src/app.js"),
        tree_item("src/util.py"),
        tree_item("README.md"),
        tree_item("logo.PNG"),
        tree_item("package-lock.json"),
        tree_item("node_modules/left-pad/index.js"),
    ]
    routes = {
        f"{API}/repos/octo/demo": FakeResponse(200, {"default_branch": "main"}),
        f"{API}/repos/octo/demo/git/trees/main": FakeResponse(200, {"tree": items, "truncated": False}),
        blob_url("src_app.js"): blob_response("const a = 1; // answer\n"),
        blob_url("src_util.py"): blob_response("x = 1  # note\n"),
        blob_url("README.md"): blob_response("# Demo\n"),
    }
    return FakeSession(routes)
