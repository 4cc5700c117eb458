"""Main repository orchestrator: load, select, merge and save."""
import asyncio
import logging
import os
import re
from typing import Any, List, Optional

from ..adapters.github import GitHubClient, parse_repo_url
from ..utils.comments import strip_comments
from ..utils.file_filter import FileFilter, FileSelection
from ..utils.tree_builder import generate_ascii_tree
from .aggregator import ContentAggregator, ProgressCallback, serialize
from .errors import ReferenceParseError
from .models import Config, MergeProgress, MergeResult, RepositoryRef, TreeEntry

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid GitHub URL. Format: https://github.com/owner/repo"


class RepositoryAnalyzer:
    """Holds the state of one repository load and runs merges over it.
    
    A new ``load`` replaces the repository, the entry listing, the
    selection and any previous merge result.
    """
    
    def __init__(self, config: Config, session: Optional[Any] = None):
        """
        Args:
            config: Settings, including the credential and ignore extensions.
            session: Optional pre-built HTTP session handed to every client.
        """
        self.config = config
        self.file_filter = FileFilter(config)
        self.session = session
        self.repo: Optional[RepositoryRef] = None
        self.entries: List[TreeEntry] = []
        self.selection = FileSelection()
        self.warnings: List[str] = []
        self.last_result: Optional[MergeResult] = None
    
    def _client(self) -> GitHubClient:
        return GitHubClient(self.config, session=self.session)
    
    def resolve_reference(self, url: str, branch: Optional[str] = None) -> RepositoryRef:
        """
        Parse a URL, applying a caller-supplied branch over the derived one.
        
        Raises:
            ReferenceParseError: If the URL is not a repository reference.
        """
        ref = parse_repo_url(url, self.config.expected_host)
        if ref is None:
            raise ReferenceParseError(INVALID_URL_MESSAGE)
        if branch and branch.strip():
            ref = ref.with_branch(branch.strip())
        return ref
    
    async def load_async(self, url: str, branch: Optional[str] = None) -> FileSelection:
        """
        Load a repository listing and select every eligible file.
        
        Raises:
            ReferenceParseError: If the URL is invalid.
            RemoteUnavailableError: If metadata or the tree cannot be fetched.
        """
        ref = self.resolve_reference(url, branch)
        self.last_result = None
        
        async with self._client() as client:
            if not ref.branch:
                ref = ref.with_branch(await client.get_default_branch(ref.owner, ref.name))
            entries = await client.get_tree(ref.owner, ref.name, ref.branch)
            warnings = list(client.warnings)
        
        eligible = self.file_filter.filter_entries(entries)
        for entry in eligible:
            entry.selected = True
        
        self.repo = ref
        self.entries = entries
        self.selection = FileSelection(eligible)
        self.warnings = warnings
        logger.info(
            "Loaded %s@%s: %d entries, %d eligible files",
            ref.full_name, ref.branch, len(entries), len(eligible),
        )
        return self.selection
    
    def load(self, url: str, branch: Optional[str] = None) -> FileSelection:
        """Synchronous entry point for ``load_async``."""
        return asyncio.run(self.load_async(url, branch))
    
    def _transform(self, path: str, content: str) -> str:
        return strip_comments(content, path)
    
    async def merge_async(self, progress_callback: Optional[ProgressCallback] = None) -> MergeResult:
        """
        Fetch the selected files and build the merged document.
        
        Raises:
            RuntimeError: If no repository has been loaded.
            OrchestrationError: If the merge control flow fails.
        """
        if self.repo is None:
            raise RuntimeError("No repository loaded")
        
        selected = self.selection.selected_entries()
        if not selected:
            result = MergeResult(repo=self.repo, document="", warnings=list(self.warnings))
            self.last_result = result
            return result
        
        async with self._client() as client:
            aggregator = ContentAggregator(
                client.get_blob_content,
                batch_size=self.config.batch_size,
                sanitize=client.sanitize_error,
                transform=self._transform if self.config.strip_comments else None,
            )
            files = await aggregator.fetch_all(selected, progress_callback)
        
        document = serialize(files)
        if self.config.include_tree:
            document = generate_ascii_tree([f.path for f in files]) + document
        
        result = MergeResult(
            repo=self.repo,
            document=document,
            files=files,
            progress=MergeProgress(completed=len(files), total=len(selected)),
            warnings=list(self.warnings),
        )
        self.last_result = result
        return result
    
    def merge(self, progress_callback: Optional[ProgressCallback] = None) -> MergeResult:
        """Synchronous entry point for ``merge_async``."""
        return asyncio.run(self.merge_async(progress_callback))
    
    @staticmethod
    def _sanitize_filename(name: str) -> str:
        """Sanitize a string for use as a filename."""
        sanitized = re.sub(r'[<>:"/\\|?*]', '_', name)
        return sanitized.rstrip('. ')
    
    def save_results(self, result: MergeResult, output_dir: str = ".") -> str:
        """
        Write the merged document to ``{repo}-{branch}-merged.txt``.
        
        Returns:
            Path of the written file.
        """
        os.makedirs(output_dir, exist_ok=True)
        path = os.path.join(output_dir, self._sanitize_filename(result.output_filename))
        with open(path, 'w', encoding='utf-8') as f:
            f.write(result.document)
        logger.info("Wrote %s (%.2f KB)", path, result.size_kb)
        return path
