"""
Settings for the AI chat-completion client.

Values come from the environment; a ``.env`` file in the working directory
is loaded first so local keys do not have to be exported by hand.
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_ENDPOINT = "https://api.aimlapi.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-3.5-turbo"


@dataclass
class AISettings:
    """Connection and sampling settings for field group generation."""

    api_key: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    max_tokens: int = 1500
    temperature: float = 0.3
    timeout: int = 30

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AISettings":
        """
        Build settings from ``ACF_AI_*`` environment variables.

        Args:
            env_file: Explicit .env path; the default lookup is used if omitted

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        load_dotenv(env_file)

        settings = cls(
            api_key=os.getenv("ACF_AI_API_KEY", ""),
            endpoint=os.getenv("ACF_AI_ENDPOINT", DEFAULT_ENDPOINT),
            model=os.getenv("ACF_AI_MODEL", DEFAULT_MODEL),
            max_tokens=int(os.getenv("ACF_AI_MAX_TOKENS", "1500")),
            temperature=float(os.getenv("ACF_AI_TEMPERATURE", "0.3")),
            timeout=int(os.getenv("ACF_AI_TIMEOUT", "30")),
        )
        logger.debug("AI settings loaded (model=%s, endpoint=%s)", settings.model, settings.endpoint)
        return settings

    def with_overrides(self, **overrides) -> "AISettings":
        """Copy with every non-empty override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v})
