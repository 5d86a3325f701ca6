"""
Chat-completion client producing ACF field group JSON.

The client makes a single POST per prompt. Every failure (missing key,
transport error, empty answer, undecodable or structurally invalid JSON)
comes back as an error result rather than an exception.
"""

import json
import re
from typing import Any, Dict, List, Optional

import requests

from ..codegen.core.schema import validate_field_groups
from ..config import AISettings
from ..logging_config import get_logger
from .prompts import build_messages

logger = get_logger(__name__)

_JSON_BLOCK = re.compile(r"```json\n([\s\S]*?)\n```")


class AIClientError(Exception):
    """Exception raised inside the client; converted to an error result."""

    def __init__(
        self,
        message: str,
        error_type: str = "error",
        raw_response: Optional[str] = None,
        problems: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.raw_response = raw_response
        self.problems = list(problems or [])


class AIGenerationResult:
    """Container for an AI generation outcome."""

    def __init__(self, data: List[Dict[str, Any]], raw: str = ""):
        self.status = "success"
        self.data = data
        self.raw = raw
        self.message: Optional[str] = None
        self.error_type: Optional[str] = None
        self.raw_response: Optional[str] = None
        self.problems: List[str] = []

    @property
    def success(self) -> bool:
        return self.status == "success"

    @classmethod
    def error(
        cls,
        message: str,
        error_type: str = "error",
        raw_response: Optional[str] = None,
        problems: Optional[List[str]] = None,
    ) -> "AIGenerationResult":
        """Create a failed generation result."""
        result = cls(data=[])
        result.status = "error"
        result.message = message
        result.error_type = error_type
        result.raw_response = raw_response
        result.problems = list(problems or [])
        return result

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"status": self.status, "data": self.data, "raw": self.raw}
        result = {"status": self.status, "message": self.message}
        if self.error_type != "error":
            result["error_type"] = self.error_type
        if self.raw_response is not None:
            result["raw_response"] = self.raw_response
        return result


def extract_json_block(content: str) -> str:
    """Return the first ```json fenced block of ``content``, or the content itself."""
    match = _JSON_BLOCK.search(content)
    if match:
        return match.group(1)
    return content


class ACFAIClient:
    """Generates ACF field groups from natural language prompts."""

    def __init__(self, settings: Optional[AISettings] = None, session=None):
        """
        Initialize client.

        Args:
            settings: Connection settings; read from the environment if omitted
            session: Object with a ``post`` method (``requests`` module by default)
        """
        self.settings = settings or AISettings.from_env()
        self._http = session or requests

    def generate(self, prompt: str) -> AIGenerationResult:
        """
        Ask the API for field groups matching ``prompt``.

        Returns:
            AIGenerationResult whose ``data`` is a list of field group dicts
        """
        try:
            content = self._request_content(prompt)
            data = self._decode(content)
        except AIClientError as e:
            logger.error("AI generation failed: %s", e)
            return AIGenerationResult.error(
                str(e), e.error_type, e.raw_response, e.problems
            )

        logger.info("AI generated %d field group(s)", len(data))
        return AIGenerationResult(data, json.dumps(data, ensure_ascii=False))

    def _request_content(self, prompt: str) -> str:
        if not self.settings.api_key:
            raise AIClientError("API key is not set.", "missing_api_key")

        payload = {
            "model": self.settings.model,
            "messages": build_messages(prompt),
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug("POST %s (model=%s)", self.settings.endpoint, self.settings.model)
        try:
            response = self._http.post(
                self.settings.endpoint,
                headers=headers,
                json=payload,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise AIClientError(f"Request failed: {e}", "request_failed") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not isinstance(content, str) or not content.strip():
            raise AIClientError("No valid response from API.", "no_response")

        return content.strip()

    def _decode(self, content: str) -> List[Dict[str, Any]]:
        json_content = extract_json_block(content)

        try:
            decoded = json.loads(json_content)
        except json.JSONDecodeError as e:
            raise AIClientError(
                f"Invalid JSON response: {e.msg}", "invalid_json", raw_response=content
            ) from e

        # A lone group object is wrapped so callers always get a list
        if isinstance(decoded, dict) and "key" in decoded:
            decoded = [decoded]

        problems = validate_field_groups(decoded)
        if problems:
            raise AIClientError(
                "Invalid field group schema: " + "; ".join(problems),
                "invalid_schema",
                raw_response=content,
                problems=problems,
            )

        if isinstance(decoded, dict):
            decoded = list(decoded.values())
        return decoded
