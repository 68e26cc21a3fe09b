import threading

import pytest

from identity_hash import HashTimeout, UnrecognizedFormatMarker
from identity_hash.worker import HashWorkerPool
from identity_hash.worker import pool as pool_module


def test_pool_hashes_and_verifies():
    with HashWorkerPool(max_workers=2, timeout=30) as pool:
        v2 = pool.hash_v2("pw")
        v3 = pool.hash_v3("pw")

        assert pool.verify("pw", v2)
        assert pool.verify("pw", v3)
        assert pool.verify("nope", v3) is False


def test_pool_futures():
    with HashWorkerPool(max_workers=2, timeout=30) as pool:
        futures = [pool.submit_hash_v3(f"pw{idx}") for idx in range(3)]
        blobs = [future.result() for future in futures]

        assert all(pool.submit_verify(f"pw{idx}", blob).result() for idx, blob in enumerate(blobs))


def test_pool_propagates_errors():
    with HashWorkerPool(max_workers=1, timeout=30) as pool:
        with pytest.raises(UnrecognizedFormatMarker):
            pool.verify("pw", b"\x05abc")


def test_pool_times_out(monkeypatch):
    release = threading.Event()

    def slow_verify(password, blob, encoding):
        release.wait(5)
        return True

    monkeypatch.setattr(pool_module, "verify", slow_verify)
    pool = HashWorkerPool(max_workers=1, timeout=0.05)
    try:
        with pytest.raises(HashTimeout):
            pool.verify("pw", b"\x01")
    finally:
        release.set()
        pool.close()


def test_pool_reads_settings(monkeypatch):
    monkeypatch.setenv("IDENTITY_HASH_WORKERS", "3")
    monkeypatch.setenv("IDENTITY_HASH_TIMEOUT_SECONDS", "2.5")
    with HashWorkerPool() as pool:
        assert pool._max_workers == 3
        assert pool._timeout == 2.5
