"""
Core data models for gitmerge.

This module contains the fundamental data structures used throughout
the application for configuration, repository references, tree entries
and merge results.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

from .tokenizer import estimate_tokens

# Load environment variables from .env file
load_dotenv()


DEFAULT_IGNORE_EXTENSIONS = [
    '.png', '.jpg', '.jpeg', '.gif', '.svg', '.ico', '.webp',
    '.mp4', '.mov', '.mp3', '.wav',
    '.pdf', '.zip', '.tar', '.gz', '.7z', '.rar',
    '.exe', '.dll', '.so', '.dylib', '.bin',
    '.lock', '-lock.json', '.pyc', '.class',
]


@dataclass
class Config:
    """Configuration settings for gitmerge."""
    
    github_token: str = field(default_factory=lambda: os.getenv('GITHUB_TOKEN', ''))
    
    # Ordered, case-insensitive extension denylist (may hold compound suffixes)
    ignore_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE_EXTENSIONS))
    
    # GitHub API access
    api_base_url: str = "https://api.github.com"
    expected_host: str = "github.com"
    request_timeout: float = 30.0
    
    # Number of blob fetches allowed in flight at once
    batch_size: int = 5
    
    # Post-processing of the merged document
    strip_comments: bool = False
    include_tree: bool = False
    
    # Chat settings
    llm_api_key: str = field(default_factory=lambda: os.getenv('OPENAI_API_KEY', ''))
    llm_model: str = field(default_factory=lambda: os.getenv('GITMERGE_MODEL', 'gpt-4o-mini'))
    llm_base_url: Optional[str] = field(default_factory=lambda: os.getenv('OPENAI_BASE_URL') or None)
    
    token_encoder: str = "cl100k_base"
    debug: bool = False


@dataclass(frozen=True)
class RepositoryRef:
    """Owner/name/branch triple identifying one repository snapshot.
    
    An empty branch means "use the remote default"; it is replaced by a
    new ref carrying the concrete branch once resolved.
    """
    
    owner: str
    name: str
    branch: str = ""
    
    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
    
    def with_branch(self, branch: str) -> 'RepositoryRef':
        return RepositoryRef(self.owner, self.name, branch)


@dataclass
class TreeEntry:
    """One path from a recursive tree listing."""
    
    path: str
    kind: str  # 'blob' or 'tree'
    content_ref: str = ""
    size: Optional[int] = None
    selected: bool = True
    
    @property
    def is_blob(self) -> bool:
        return self.kind == 'blob'
    
    @classmethod
    def from_api(cls, item: dict) -> 'TreeEntry':
        """Build an entry from a GitHub git/trees item."""
        return cls(
            path=item.get('path', ''),
            kind=item.get('type', ''),
            content_ref=item.get('url', ''),
            size=item.get('size'),
        )


@dataclass
class FetchedFile:
    """Content (or an in-band error marker) for one selected entry."""
    
    path: str
    content: str


@dataclass
class MergeProgress:
    """Running completed/total counter for a merge run."""
    
    completed: int = 0
    total: int = 0
    
    @property
    def done(self) -> bool:
        return self.completed == self.total
    
    @property
    def percentage(self) -> float:
        if not self.total:
            return 100.0
        return (self.completed / self.total) * 100


@dataclass
class MergeResult:
    """Result of one merge run."""
    
    repo: RepositoryRef
    document: str
    files: List[FetchedFile] = field(default_factory=list)
    progress: MergeProgress = field(default_factory=MergeProgress)
    warnings: List[str] = field(default_factory=list)
    
    @property
    def total_files(self) -> int:
        return len(self.files)
    
    @property
    def estimated_tokens(self) -> int:
        return estimate_tokens(self.document)
    
    @property
    def size_kb(self) -> float:
        return len(self.document) / 1024
    
    @property
    def output_filename(self) -> str:
        return f"{self.repo.name}-{self.repo.branch}-merged.txt"
