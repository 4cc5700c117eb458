"""Chat layer over merged repository documents."""

from .chat import ChatSession
from .prompts import INITIAL_SYSTEM_INSTRUCTION, build_system_prompt

__all__ = ["ChatSession", "INITIAL_SYSTEM_INSTRUCTION", "build_system_prompt"]
