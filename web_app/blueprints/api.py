"""
Password Hash API Blueprint
===========================
Provides JSON endpoints for producing and checking identity password hashes.

    POST /api/hash      {"password", "format": "v2"|"v3", "encoding"}
    POST /api/verify    {"password", "hash", "encoding"}
    POST /api/inspect   {"hash", "encoding"}

``encoding`` is optional and defaults to IDENTITY_HASH_ENCODING (base64).
"""

import threading
from typing import Optional

from flask import Blueprint, jsonify, request

from identity_hash import HashTimeout, IdentityHashError, encode_text, parse
from identity_hash.auth.encoding import normalize_encoding
from identity_hash.settings import get_settings
from identity_hash.utils.logging_setup import setup_logger
from identity_hash.worker import HashWorkerPool

logger = setup_logger(name=__name__)

api_bp = Blueprint("api", __name__)

# ── Shared worker pool (created once, reused across requests) ────────────────
_pool: Optional[HashWorkerPool] = None
_pool_lock = threading.Lock()


def _get_pool() -> HashWorkerPool:
    """Lazy-initialise the worker pool so no threads start at import time."""
    global _pool
    with _pool_lock:
        if _pool is None:
            _pool = HashWorkerPool()
            logger.info("Hash API worker pool initialised.")
    return _pool


# ── Helper utilities ─────────────────────────────────────────────────────────

def _bad_request(message: str):
    return jsonify({"error": message}), 400


def _read_payload():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None
    return payload


def _read_text(payload: dict, field: str) -> Optional[str]:
    value = payload.get(field)
    if not isinstance(value, str) or not value:
        return None
    return value


def _read_encoding(payload: dict) -> str:
    return normalize_encoding(payload.get("encoding") or get_settings().default_encoding)


# ── Routes ───────────────────────────────────────────────────────────────────

@api_bp.route("/hash", methods=["POST"])
def hash_route():
    payload = _read_payload()
    if payload is None:
        logger.warning("Hash request rejected: body is not a JSON object.")
        return _bad_request("Request body must be a JSON object.")

    password = _read_text(payload, "password")
    if password is None:
        return _bad_request("Missing required field: password.")

    version = str(payload.get("format", "v3")).lower()
    if version not in {"v2", "v3"}:
        return _bad_request(f"Unsupported format: {version}")

    pool = _get_pool()
    try:
        encoding = _read_encoding(payload)
        blob = pool.hash_v2(password) if version == "v2" else pool.hash_v3(password)
    except HashTimeout as exc:
        return jsonify({"error": str(exc)}), 503
    except IdentityHashError as exc:
        logger.warning("Hash request rejected: %s", exc)
        return _bad_request(str(exc))

    logger.info("Produced %s hash.", version.upper())
    return jsonify({"hash": encode_text(blob, encoding), "format": version, "encoding": encoding}), 200


@api_bp.route("/verify", methods=["POST"])
def verify_route():
    payload = _read_payload()
    if payload is None:
        logger.warning("Verify request rejected: body is not a JSON object.")
        return _bad_request("Request body must be a JSON object.")

    password = _read_text(payload, "password")
    stored = _read_text(payload, "hash")
    if password is None or stored is None:
        return _bad_request("Missing required fields: password and hash.")

    try:
        encoding = _read_encoding(payload)
        verified = _get_pool().verify(password, stored, encoding)
    except HashTimeout as exc:
        return jsonify({"error": str(exc)}), 503
    except IdentityHashError as exc:
        logger.warning("Verify request rejected: %s", exc)
        return _bad_request(str(exc))

    return jsonify({"verified": verified}), 200


@api_bp.route("/inspect", methods=["POST"])
def inspect_route():
    payload = _read_payload()
    if payload is None:
        return _bad_request("Request body must be a JSON object.")

    stored = _read_text(payload, "hash")
    if stored is None:
        return _bad_request("Missing required field: hash.")

    try:
        record = parse(stored, _read_encoding(payload))
    except IdentityHashError as exc:
        logger.warning("Inspect request rejected: %s", exc)
        return _bad_request(str(exc))

    return jsonify(record.describe()), 200
