"""
Security utilities: staff password hashing and security event logging
"""

import hashlib
import hmac
import logging
import secrets
import time

from skadam.infrastructure.utilities.constants import SecuritySettings

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Salted PBKDF2 hash encoded as "iterations$salt$digest" (hex)"""
    salt = secrets.token_bytes(SecuritySettings.SALT_BYTES)
    digest = hashlib.pbkdf2_hmac(
        SecuritySettings.PBKDF2_ALGORITHM,
        password.encode("utf-8"),
        salt,
        SecuritySettings.PBKDF2_ITERATIONS,
    )
    return f"{SecuritySettings.PBKDF2_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        iterations, salt_hex, digest_hex = encoded.split("$")
        digest = hashlib.pbkdf2_hmac(
            SecuritySettings.PBKDF2_ALGORITHM,
            password.encode("utf-8"),
            bytes.fromhex(salt_hex),
            int(iterations),
        )
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(digest.hex(), digest_hex)


def log_security_event(event_type: str, username: str, details: str = ""):
    """Log security-related events"""
    logger.warning(
        "SECURITY EVENT: %s | User: %s | Details: %s",
        event_type,
        username,
        details,
        extra={
            "event_type": event_type,
            "username": username,
            "details": details,
            "timestamp": time.time(),
        },
    )
