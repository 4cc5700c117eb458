"""GitHub repository adapter implementation."""
import asyncio
import base64
import binascii
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlsplit

import aiohttp

from ..core.errors import BlobFetchError, PartialListingWarning, RemoteUnavailableError
from ..core.models import Config, RepositoryRef, TreeEntry

logger = logging.getLogger(__name__)

BINARY_CONTENT_MARKER = "[Binary or non-text content]"


def parse_repo_url(url: str, expected_host: str = "github.com") -> Optional[RepositoryRef]:
    """
    Parse a repository URL into a RepositoryRef.
    
    Accepts ``https://github.com/owner/repo`` optionally followed by
    ``.git`` or ``/tree/<branch>``, where the branch may contain slashes.
    
    Args:
        url: Repository URL.
        expected_host: Hostname the URL must point at.
        
    Returns:
        RepositoryRef, or None when the URL is not a valid repository reference.
    """
    if not isinstance(url, str):
        return None
    
    clean_url = url[:-1] if url.endswith('/') else url
    try:
        parsed = urlsplit(clean_url)
        hostname = parsed.hostname
    except ValueError:
        return None
    
    if not parsed.scheme or hostname != expected_host:
        return None
    
    parts = [part for part in parsed.path.split('/') if part]
    if len(parts) < 2:
        return None
    
    owner = parts[0]
    name = parts[1]
    if name.endswith('.git'):
        name = name[:-4]
    
    branch = ""
    if len(parts) >= 4 and parts[2] == 'tree':
        branch = '/'.join(parts[3:])
    
    return RepositoryRef(owner=owner, name=name, branch=branch)


class GitHubClient:
    """Async GitHub REST client for repo metadata, recursive trees and blobs."""
    
    def __init__(self, config: Config, session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self.token = config.github_token
        self.base_url = config.api_base_url.rstrip('/')
        self.session = session
        self._owns_session = session is None
        self.warnings: List[str] = []
    
    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'gitmerge',
        }
        if self.token:
            headers['Authorization'] = f'token {self.token}'
        return headers
    
    async def __aenter__(self):
        """Async context manager entry with session setup."""
        if self.session is None:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
            self.session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit with guaranteed cleanup."""
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
        if self._owns_session:
            self.session = None
    
    def _require_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            raise RuntimeError("GitHubClient must be used as an async context manager")
        return self.session
    
    def sanitize_error(self, error: str) -> str:
        """Remove the access token from error messages."""
        if self.token and self.token in error:
            return error.replace(self.token, "[REDACTED]")
        return error
    
    @staticmethod
    def _is_success(status: int) -> bool:
        return 200 <= status < 300
    
    @staticmethod
    async def _read_json(response: Any) -> Any:
        return await response.json(content_type=None)
    
    async def get_default_branch(self, owner: str, name: str) -> str:
        """
        Get the repository's default branch.
        
        Raises:
            RemoteUnavailableError: If the repository is missing or inaccessible.
        """
        url = f"{self.base_url}/repos/{owner}/{name}"
        session = self._require_session()
        try:
            async with session.get(url, headers=self.headers) as response:
                if not self._is_success(response.status):
                    message = "Repository not found or private"
                    try:
                        body = await self._read_json(response)
                        if isinstance(body, dict) and body.get('message'):
                            message = body['message']
                    except (ValueError, aiohttp.ClientError):
                        pass
                    raise RemoteUnavailableError(message)
                try:
                    data = await self._read_json(response)
                except ValueError as e:
                    raise RemoteUnavailableError("Repository not found or private") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteUnavailableError(self.sanitize_error(f"Network error: {e}")) from e

        branch = data.get('default_branch') if isinstance(data, dict) else None
        if not branch:
            raise RemoteUnavailableError("Repository not found or private")
        logger.debug("Default branch for %s/%s is %s", owner, name, branch)
        return branch
    
    async def get_tree(self, owner: str, name: str, ref: str) -> List[TreeEntry]:
        """
        Get the recursive tree listing for a reference.
        
        A truncated listing is logged and recorded in ``warnings`` but the
        partial entries are still returned.
        
        Raises:
            RemoteUnavailableError: If the tree could not be fetched.
        """
        url = f"{self.base_url}/repos/{owner}/{name}/git/trees/{quote(ref, safe='/')}"
        session = self._require_session()
        try:
            async with session.get(url, params={'recursive': '1'}, headers=self.headers) as response:
                if not self._is_success(response.status):
                    raise RemoteUnavailableError("Failed to fetch file tree")
                try:
                    data = await self._read_json(response)
                except ValueError as e:
                    raise RemoteUnavailableError("Failed to fetch file tree") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteUnavailableError(self.sanitize_error(f"Network error: {e}")) from e

        if not isinstance(data, dict) or not isinstance(data.get('tree', []), list):
            raise RemoteUnavailableError("Failed to fetch file tree")

        if data.get('truncated'):
            message = f"Git tree for {owner}/{name}@{ref} truncated due to size limit"
            logger.warning("%s: %s", PartialListingWarning.__name__, message)
            self.warnings.append(message)
        
        return [TreeEntry.from_api(item) for item in data.get('tree', [])]
    
    async def get_blob_content(self, content_ref: str) -> str:
        """
        Fetch one blob and decode it as UTF-8 text.
        
        Non-base64 payloads yield ``BINARY_CONTENT_MARKER``; undecodable
        base64 yields an ``[Error decoding file: ...]`` marker.
        
        Raises:
            BlobFetchError: If the remote returned a non-success status.
        """
        session = self._require_session()
        async with session.get(content_ref, headers=self.headers) as response:
            if not self._is_success(response.status):
                raise BlobFetchError("Failed to fetch blob")
            data = await self._read_json(response)
        
        if data.get('encoding') != 'base64':
            return BINARY_CONTENT_MARKER
        
        try:
            raw = base64.b64decode(re.sub(r'\s', '', data.get('content', '')), validate=True)
        except (binascii.Error, ValueError):
            return f"[Error decoding file: {content_ref}]"
        return raw.decode('utf-8', errors='replace')
