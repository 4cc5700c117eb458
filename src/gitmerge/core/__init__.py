"""Core components for gitmerge."""

from .models import (
    Config,
    RepositoryRef,
    TreeEntry,
    FetchedFile,
    MergeProgress,
    MergeResult,
)
from .errors import (
    GitMergeError,
    ReferenceParseError,
    RemoteUnavailableError,
    BlobFetchError,
    OrchestrationError,
    PartialListingWarning,
)
from .tokenizer import TokenCounter, estimate_tokens

__all__ = [
    "Config",
    "RepositoryRef",
    "TreeEntry",
    "FetchedFile",
    "MergeProgress",
    "MergeResult",
    "GitMergeError",
    "ReferenceParseError",
    "RemoteUnavailableError",
    "BlobFetchError",
    "OrchestrationError",
    "PartialListingWarning",
    "TokenCounter",
    "estimate_tokens",
]
