"""
Key allocation for generated field groups.

Every group, field and layout key emitted in one document must be unique.
The allocator hands back a candidate key unchanged the first time it is seen
and mints a fresh one on any later collision.
"""

import itertools
import threading
import time
import uuid
from typing import List

from ...logging_config import get_logger

logger = get_logger(__name__)

_token_counter = itertools.count(1)


class KeyAllocator:
    """Tracks used keys and re-mints colliding ones."""

    def __init__(self):
        self._used = set()
        self._order: List[str] = []
        self._lock = threading.Lock()

    def allocate(self, candidate_key: str, kind: str = "field") -> str:
        """
        Return a key that has not been returned before.

        Args:
            candidate_key: The key found in the schema
            kind: "group", "field" or "layout"; prefixes minted keys

        Returns:
            The candidate itself if unused, otherwise a freshly minted key
        """
        with self._lock:
            key = candidate_key
            if not key or key in self._used:
                key = self._mint(kind)
                while key in self._used:
                    key = self._mint(kind)
                logger.debug("Key %r already used, re-minted as %s", candidate_key, key)

            self._used.add(key)
            self._order.append(key)
            return key

    def _mint(self, kind: str) -> str:
        # 13 hex chars, the length of a PHP uniqid(); the counter suffix
        # keeps tokens distinct process-wide
        token = f"{uuid.uuid4().hex[:9]}{next(_token_counter):04x}"
        return f"{kind}_{token}_{int(time.time())}"

    def is_used(self, key: str) -> bool:
        with self._lock:
            return key in self._used

    @property
    def used_keys(self) -> List[str]:
        """Keys returned so far, in allocation order."""
        with self._lock:
            return list(self._order)

    def reset(self):
        """Forget every allocated key."""
        with self._lock:
            self._used.clear()
            self._order.clear()
