"""
AI field group generation.

Asks an OpenAI-compatible chat-completion API for ACF field group JSON and
checks the answer against the same structural rules the generator uses.
"""

from .client import ACFAIClient, AIClientError, AIGenerationResult, extract_json_block
from .prompts import SYSTEM_PROMPT, build_messages

__all__ = [
    "ACFAIClient",
    "AIClientError",
    "AIGenerationResult",
    "extract_json_block",
    "SYSTEM_PROMPT",
    "build_messages",
]
