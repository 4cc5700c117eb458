"""Batched content fetching and merged-document serialization."""

import asyncio
import logging
from typing import Awaitable, Callable, Iterator, List, Optional, Sequence

from .errors import OrchestrationError
from .models import FetchedFile, MergeProgress, TreeEntry

logger = logging.getLogger(__name__)

FILE_SEPARATOR = "-" * 50
DEFAULT_BATCH_SIZE = 5

FetchContent = Callable[[str], Awaitable[str]]
ProgressCallback = Callable[[MergeProgress], None]


def format_file_block(fetched: FetchedFile) -> str:
    """Render one file as header, separator, content, separator."""
    return f"File: {fetched.path}\n{FILE_SEPARATOR}\n{fetched.content}\n{FILE_SEPARATOR}\n"


def serialize(files: Sequence[FetchedFile]) -> str:
    """Join file blocks in the given order, separated by a blank line."""
    return "\n".join(format_file_block(fetched) for fetched in files)


def iter_batches(items: Sequence[TreeEntry], size: int) -> Iterator[Sequence[TreeEntry]]:
    """Yield consecutive slices of at most ``size`` items."""
    for start in range(0, len(items), size):
        yield items[start:start + size]


class ContentAggregator:
    """
    Fetches selected entries in sequential batches and merges the results.
    
    Within a batch all fetches run concurrently; the next batch starts
    only after every fetch of the current one has settled. Results are
    assembled by position, so output order always equals input order.
    """
    
    def __init__(
        self,
        fetch_content: FetchContent,
        batch_size: int = DEFAULT_BATCH_SIZE,
        sanitize: Optional[Callable[[str], str]] = None,
        transform: Optional[Callable[[str, str], str]] = None,
    ):
        """
        Args:
            fetch_content: Coroutine function returning text for a content ref.
            batch_size: Maximum number of fetches in flight at once.
            sanitize: Optional scrubber applied to error details before they
                are embedded in the document.
            transform: Optional (path, content) rewrite applied to successfully
                fetched content only.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.fetch_content = fetch_content
        self.batch_size = batch_size
        self.sanitize = sanitize or (lambda text: text)
        self.transform = transform
        self.progress = MergeProgress()
    
    async def _fetch_one(self, entry: TreeEntry) -> FetchedFile:
        """Fetch one entry, turning any failure into an in-band marker."""
        try:
            content = await self.fetch_content(entry.content_ref)
            if self.transform:
                content = self.transform(entry.path, content)
        except Exception as e:
            detail = self.sanitize(str(e) or type(e).__name__)
            logger.warning("Failed to fetch %s: %s", entry.path, detail)
            content = f"[Error fetching content: {detail}]"
        return FetchedFile(path=entry.path, content=content)
    
    async def fetch_all(
        self,
        entries: Sequence[TreeEntry],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[FetchedFile]:
        """
        Fetch content for every entry, one batch at a time.
        
        Returns:
            One FetchedFile per entry, in entry order.
            
        Raises:
            OrchestrationError: If the batching control flow itself fails.
        """
        entries = list(entries)
        self.progress = MergeProgress(completed=0, total=len(entries))
        results: List[FetchedFile] = []
        
        try:
            for batch_number, batch in enumerate(iter_batches(entries, self.batch_size), start=1):
                logger.debug("Fetching batch %d (%d files)", batch_number, len(batch))
                batch_results = await asyncio.gather(*(self._fetch_one(entry) for entry in batch))
                results.extend(batch_results)
                self.progress = MergeProgress(
                    completed=min(len(results), len(entries)),
                    total=len(entries),
                )
                if progress_callback:
                    progress_callback(self.progress)
        except Exception as e:
            logger.exception("Merge orchestration failed")
            raise OrchestrationError("Error during merging process.") from e
        
        if len(results) != len(entries):
            raise OrchestrationError("Error during merging process.")
        return results
    
    async def merge(
        self,
        entries: Sequence[TreeEntry],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> str:
        """Fetch every entry and return the serialized merged document."""
        return serialize(await self.fetch_all(entries, progress_callback))
