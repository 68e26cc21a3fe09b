from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional

from ..auth.encoding import BASE64
from ..auth.passwords import BlobLike, hash_v2, hash_v3, verify
from ..errors import HashTimeout
from ..settings import get_settings
from ..utils.logging_setup import setup_logger

logger = setup_logger(name=__name__)


class HashWorkerPool:
    """
    Runs key derivation on worker threads so event loops and request
    handlers are not blocked by it.

    The blocking helpers wait at most ``timeout`` seconds for a result. On
    timeout the caller gets ``HashTimeout``; the derivation keeps running on
    its worker until it finishes and its result is discarded.
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> None:
        settings = get_settings()
        self._max_workers = max_workers or settings.workers
        self._timeout = timeout if timeout is not None else settings.timeout_seconds
        self._executor = ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="identity-hash"
        )
        logger.debug(
            "Hash worker pool started (workers=%s, timeout=%ss).",
            self._max_workers,
            self._timeout,
        )

    # ── Futures ──────────────────────────────────────────────────────────

    def submit_hash_v2(self, password: str) -> Future:
        return self._executor.submit(hash_v2, password)

    def submit_hash_v3(self, password: str) -> Future:
        return self._executor.submit(hash_v3, password)

    def submit_verify(self, password: str, blob: BlobLike, encoding: str = BASE64) -> Future:
        return self._executor.submit(verify, password, blob, encoding)

    # ── Blocking helpers ─────────────────────────────────────────────────

    def hash_v2(self, password: str) -> bytes:
        return self._wait(self.submit_hash_v2(password), "hash_v2")

    def hash_v3(self, password: str) -> bytes:
        return self._wait(self.submit_hash_v3(password), "hash_v3")

    def verify(self, password: str, blob: BlobLike, encoding: str = BASE64) -> bool:
        return self._wait(self.submit_verify(password, blob, encoding), "verify")

    def close(self) -> None:
        logger.debug("Shutting down hash worker pool.")
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "HashWorkerPool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _wait(self, future: Future, operation: str):
        try:
            return future.result(timeout=self._timeout)
        except FutureTimeoutError as exc:
            future.cancel()
            logger.warning("%s did not finish within %ss.", operation, self._timeout)
            raise HashTimeout(
                f"{operation} did not finish within {self._timeout} seconds"
            ) from exc
