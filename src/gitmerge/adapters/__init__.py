"""Repository adapters for remote hosting APIs."""

from .github import BINARY_CONTENT_MARKER, GitHubClient, parse_repo_url

__all__ = ['GitHubClient', 'parse_repo_url', 'BINARY_CONTENT_MARKER']
