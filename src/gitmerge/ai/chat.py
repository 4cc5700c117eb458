"""Chat over a merged repository document.

The merged document is handed to the model unmodified as system context.
Each ``ChatSession`` owns its own conversation; nothing is module-global.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from openai import OpenAI

from ..core.models import Config
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)


class ChatSession:
    """Conversation with an OpenAI-compatible model about one merged document."""
    
    def __init__(self, config: Config, client: Optional[Any] = None):
        """
        Args:
            config: Supplies the API key, model and optional base URL.
            client: Optional pre-built OpenAI client.
        """
        self.config = config
        self.model = config.llm_model
        self._client = client
        self.messages: List[Dict[str, str]] = []
    
    @property
    def client(self) -> Any:
        if self._client is None:
            client_kwargs = {"api_key": self.config.llm_api_key}
            if self.config.llm_base_url:
                client_kwargs["base_url"] = self.config.llm_base_url
            self._client = OpenAI(**client_kwargs)
        return self._client
    
    def initialize(self, context: str) -> None:
        """Start a new conversation with ``context`` as system context."""
        self.messages = [{"role": "system", "content": build_system_prompt(context)}]
        logger.debug("Chat initialized with %d characters of context", len(context))
    
    def is_initialized(self) -> bool:
        return bool(self.messages)
    
    def send(self, message: str) -> Iterator[str]:
        """
        Send a user message and stream the reply.
        
        Yields:
            Text deltas as they arrive. The message and full reply are
            appended to the history once the stream is exhausted.
            
        Raises:
            RuntimeError: If ``initialize`` has not been called.
        """
        if not self.is_initialized():
            raise RuntimeError("Chat session not initialized")
        
        user_message = {"role": "user", "content": message}
        stream = self.client.chat.completions.create(
            model=self.model,
            messages=self.messages + [user_message],
            stream=True,
        )
        
        content_buffer = ""
        for chunk in stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if delta:
                content_buffer += delta
                yield delta
        
        # History only records completed exchanges
        self.messages.extend([user_message, {"role": "assistant", "content": content_buffer}])
    
    def ask(self, message: str) -> str:
        """Send a message and return the complete reply."""
        return "".join(self.send(message))
    
    def reset(self) -> None:
        self.messages = []
