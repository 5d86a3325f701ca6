"""Reading ACF JSON documents from export files, acf-json directories and URLs.

A single file or URL either loads or raises ``JSONLoaderError``. A
directory is read file by file: a broken file becomes a ``JSONDocument``
carrying the error, so one bad sync file does not hide the others.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, List, Optional, Union
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Raised when a JSON document cannot be read or decoded."""

    pass


@dataclass
class JSONDocument:
    """A decoded document and where it came from."""

    source: str
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_json_file(path: Union[str, Path]) -> JSONDocument:
    """
    Decode one export file.

    Raises:
        FileNotFoundError: If the file does not exist
        JSONLoaderError: If it cannot be read or is not valid JSON
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise JSONLoaderError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONLoaderError(
            f"Invalid JSON in {path} (line {e.lineno}, column {e.colno}): {e.msg}"
        ) from e

    logger.debug("Read %s", path)
    return JSONDocument(str(path), data)


def iter_acf_json(directory: Union[str, Path]) -> Iterator[JSONDocument]:
    """
    Yield every ``*.json`` file of an acf-json directory in name order.

    Files that fail to load are yielded with ``error`` set and logged.
    """
    for path in sorted(Path(directory).glob("*.json")):
        try:
            yield read_json_file(path)
        except JSONLoaderError as e:
            logger.warning("Skipping %s: %s", path.name, e)
            yield JSONDocument(str(path), error=str(e))


def fetch_json(url: str, timeout: float = 30) -> JSONDocument:
    """
    Download and decode a JSON export over HTTP(S).

    Raises:
        JSONLoaderError: On a bad URL, a failed request or a non-JSON body
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise JSONLoaderError(f"Invalid URL: {url}")

    logger.debug("GET %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise JSONLoaderError(f"Request timed out after {timeout}s: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise JSONLoaderError(f"HTTP {e.response.status_code} from {url}") from e
    except requests.exceptions.RequestException as e:
        raise JSONLoaderError(f"Request to {url} failed: {e}") from e

    try:
        data = response.json()
    except ValueError as e:
        raise JSONLoaderError(f"Response from {url} is not JSON") from e

    return JSONDocument(url, data)


def load_documents(path: Union[str, Path]) -> List[JSONDocument]:
    """
    Load an export file, or every file of an acf-json directory.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        JSONLoaderError: If a single file fails, or a directory has no JSON files
    """
    path = Path(path)
    if not path.is_dir():
        return [read_json_file(path)]

    documents = list(iter_acf_json(path))
    if not documents:
        raise JSONLoaderError(f"No JSON files in {path}")
    return documents
