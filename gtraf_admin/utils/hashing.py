import hashlib
import json


def payload_hash(payload) -> str:
    """Stable SHA-256 of a JSON-able payload; key order and accents do not change it."""
    s = json.dumps(payload, sort_keys=True, ensure_ascii=False, separators=(",", ":"), default=str)
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def cache_key(namespace: str, payload) -> str:
    return f"{namespace}:{payload_hash(payload)}"
