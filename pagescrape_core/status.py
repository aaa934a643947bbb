#!/usr/bin/env python3
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional

from .config import Config, config as default_config

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"


@dataclass
class StatusMessage:
    text: str
    kind: str
    expires_at: float


class StatusReporter:
    """
    Status line with auto-dismiss.

    Each message stays visible for ``duration_ms`` (3s for success, 5s for
    errors unless given); ``current()`` returns None once it has expired.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        sink: Optional[Callable[[str, str], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = cfg or default_config
        self.sink = sink
        self.clock = clock
        # only the latest messages are kept; a long-running server shows many
        self.history: Deque[StatusMessage] = deque(maxlen=self.config.status_history_size)
        self._current: Optional[StatusMessage] = None

    def show(self, text: str, kind: str = SUCCESS, duration_ms: Optional[int] = None) -> StatusMessage:
        if duration_ms is None:
            duration_ms = self.config.status_error_ms if kind == ERROR else self.config.status_success_ms
        message = StatusMessage(text=text, kind=kind, expires_at=self.clock() + duration_ms / 1000.0)
        self._current = message
        self.history.append(message)
        if kind == ERROR:
            logger.warning(f"Status: {text}")
        else:
            logger.info(f"Status: {text}")
        if self.sink:
            self.sink(text, kind)
        return message

    def current(self) -> Optional[StatusMessage]:
        if self._current and self.clock() >= self._current.expires_at:
            self._current = None
        return self._current
