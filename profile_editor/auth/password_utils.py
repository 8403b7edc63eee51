"""
Password Security Utilities - One-way hashing for stored credentials

Passwords are combined with a per-user random salt and hashed with SHA-256.
The plaintext never leaves this module: callers store the returned digest
together with the salt and discard the original value.

Security Features:
    - Cryptographically secure salt generation via the secrets module
    - Unique salt per password so equal passwords produce different digests
    - Constant-time digest comparison on verification
"""

import hashlib
import hmac
import logging
import secrets

# Set up module logger
logger = logging.getLogger(__name__)

# Configuration constants
SALT_LENGTH = 16  # 32 character hex string (128 bits of entropy)
HASH_ALGORITHM = 'sha256'


def generate_salt() -> str:
    """
    Generate a cryptographically secure random salt for password hashing.

    Returns:
        str: A 32-character hexadecimal string (128 bits of entropy)

    Example:
        >>> len(generate_salt())
        32
    """
    salt = secrets.token_hex(SALT_LENGTH)
    logger.debug("Generated new cryptographic salt")
    return salt


def hash_password(password: str, salt: str) -> str:
    """
    Hash a password with salt using SHA-256.

    Args:
        password (str): Plain text password to hash
        salt (str): Cryptographic salt (from generate_salt())

    Returns:
        str: SHA-256 hash as a hexadecimal string (64 characters)

    Raises:
        ValueError: If password or salt is not a string

    Example:
        >>> salt = generate_salt()
        >>> len(hash_password("mypassword", salt))
        64
    """
    if not isinstance(password, str) or not isinstance(salt, str):
        raise ValueError("Password and salt must be strings")

    salted_password = salt + password
    password_hash = hashlib.new(HASH_ALGORITHM, salted_password.encode('utf-8')).hexdigest()

    logger.debug("Successfully generated password hash")
    return password_hash


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    """
    Verify a password against its stored hash and salt.

    Args:
        password (str): Plain text password to verify
        salt (str): Salt used for the original hash
        expected_hash (str): Stored hash to compare against

    Returns:
        bool: True if password matches the hash, False otherwise

    Example:
        >>> salt = generate_salt()
        >>> stored_hash = hash_password("mypassword", salt)
        >>> verify_password("mypassword", salt, stored_hash)
        True
        >>> verify_password("wrongpassword", salt, stored_hash)
        False
    """
    if not all(isinstance(x, str) for x in [password, salt, expected_hash]):
        logger.warning("Invalid input types for password verification")
        return False

    computed_hash = hash_password(password, salt)
    is_valid = hmac.compare_digest(computed_hash, expected_hash)

    if is_valid:
        logger.debug("Password verification succeeded")
    else:
        logger.debug("Password verification failed")

    return is_valid
