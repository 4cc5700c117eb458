"""
Token counting functionality for gitmerge.

``estimate_tokens`` is the cheap heuristic used for every summary.
``TokenCounter`` wraps tiktoken for an exact count on request.
"""

import logging
import math
from typing import Any, Optional

import tiktoken

logger = logging.getLogger(__name__)


def estimate_tokens(text: str) -> int:
    """Estimate tokens as ceil(len / 4), ~4 characters per token for code and English."""
    return math.ceil(len(text) / 4)


class TokenCounter:
    """
    Handles exact token counting for text content.
    
    The encoder is loaded lazily on first use so constructing a counter
    never touches the network.
    """
    
    def __init__(self, encoding_name: str = "cl100k_base"):
        """
        Initialize the token counter.
        
        Args:
            encoding_name: The name of the tiktoken encoding to use.
        """
        self.encoding_name = encoding_name
        self.encoder: Optional[Any] = None
    
    def _get_encoder(self) -> Any:
        if self.encoder is None:
            self.encoder = tiktoken.get_encoding(self.encoding_name)
        return self.encoder
    
    def count(self, text: str) -> int:
        """
        Count tokens in the given text.
        
        Args:
            text: The text to count tokens for.
            
        Returns:
            Number of tokens.
        """
        if not text:
            return 0
        # Merged documents may contain literal special-token strings from source files
        return len(self._get_encoder().encode(text, disallowed_special=()))
    