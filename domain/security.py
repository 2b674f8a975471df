from __future__ import annotations

import hashlib


def hash_password(password: str) -> str:
    """
    Return the SHA-256 hex digest of `password`.

    The digest is unsalted, so identical passwords always produce
    identical digests.
    """

    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def verify_password(password: str, password_hash: str) -> bool:
    return hash_password(password) == password_hash
