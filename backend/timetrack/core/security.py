from hashlib import sha256
from hmac import compare_digest


def hash_password(raw: str) -> str:
    return sha256(raw.encode("utf-8")).hexdigest()


def verify_password(raw: str, hashed: str) -> bool:
    return compare_digest(hashed, hash_password(raw))
