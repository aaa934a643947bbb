#!/usr/bin/env python3
from typing import List, Optional


class SessionCache:
    """Holds the most recent extraction result for the lifetime of a session."""

    def __init__(self):
        self._result: Optional[List[str]] = None

    def store(self, result: List[str]) -> None:
        self._result = list(result)

    def get(self) -> Optional[List[str]]:
        """The stored result, or None when nothing has been stored yet."""
        if self._result is None:
            return None
        return list(self._result)

    def is_empty(self) -> bool:
        return not self._result

    def clear(self) -> None:
        self._result = None
