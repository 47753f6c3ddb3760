import hashlib
import hmac


def compute_signature(token: str, timestamp: str, nonce: str, data: str) -> str:
    """
    SHA-1 hex digest of the four values sorted and joined with no separator.
    """
    parts = sorted([token, timestamp, nonce, data])
    return hashlib.sha1("".join(parts).encode("utf-8")).hexdigest()


def verify_signature(
    token: str, timestamp: str, nonce: str, data: str, signature: str
) -> bool:
    expected = compute_signature(token, timestamp, nonce, data)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
