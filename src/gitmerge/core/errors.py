"""Exception hierarchy for gitmerge.

Failures that stop a run propagate as ``GitMergeError`` subclasses.
Failures scoped to a single file are turned into in-band marker text by
the aggregator and never reach the caller.
"""


class GitMergeError(Exception):
    """Base class for all gitmerge errors."""


class ReferenceParseError(GitMergeError):
    """The repository URL could not be parsed."""


class RemoteUnavailableError(GitMergeError):
    """The hosting API refused a metadata or tree request."""


class BlobFetchError(GitMergeError):
    """A single file's content could not be retrieved."""


class OrchestrationError(GitMergeError):
    """The batching/merge control flow itself failed."""


class PartialListingWarning(UserWarning):
    """The remote tree listing was truncated."""
