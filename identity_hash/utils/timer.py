from __future__ import annotations

import logging
import time
from typing import Optional


class BlockTimer:
    """Times a ``with`` block; ``total_time`` is in seconds once it exits."""

    def __init__(self, label: str = "block", logger: Optional[logging.Logger] = None):
        self.label = label
        self._logger = logger
        self.start_time = 0.0
        self.end_time = 0.0
        self.total_time = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()
        self.total_time = self.end_time - self.start_time
        if self._logger is not None:
            self._logger.debug("%s took %.4f seconds", self.label, self.total_time)

        # Returning a truthy value here would suppress the exception.
        return None
