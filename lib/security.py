# =============================================================================
# lib/security.py - Password Hashing
# =============================================================================
# PBKDF2-SHA256 password hashes with a per-user random salt.
#
# Stored format:
#   pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>
# =============================================================================

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 200_000
SALT_BYTES = 16


def hash_password(password: str, iterations: int = ITERATIONS) -> str:
    """Hash a password for storage."""
    salt = secrets.token_bytes(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Check a password against a stored hash.

    Returns False for hashes in an unknown or corrupt format.
    """
    try:
        algorithm, iterations, salt_hex, digest_hex = stored_hash.split("$")
        if algorithm != ALGORITHM:
            return False
        digest = hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            bytes.fromhex(salt_hex),
            int(iterations),
        )
    except ValueError:
        return False

    return hmac.compare_digest(digest.hex(), digest_hex)
