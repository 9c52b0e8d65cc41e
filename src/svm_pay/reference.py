"""Reference ID generation for SVM-Pay transactions.

A reference is a base58-encoded 32-byte value. It is embedded in a payment
request so that the resulting transaction can be located on-chain without an
off-chain mapping.
"""

from __future__ import annotations

import hashlib
import secrets

import base58

# Size in bytes of a decoded reference (same as an SVM public key)
REFERENCE_LENGTH = 32


def generate_reference() -> str:
    """Generate a random reference ID.

    Returns:
        Base58-encoded 32 random bytes.

    Example:
        ```python
        ref = generate_reference()  # "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"
        ```
    """
    return base58.b58encode(secrets.token_bytes(REFERENCE_LENGTH)).decode("ascii")


def generate_deterministic_reference(data: str) -> str:
    """Derive a reference ID from arbitrary data.

    The reference is the SHA-256 digest of ``data``, so a merchant can
    re-derive the reference for an order id when reconciling payments.

    Args:
        data: Input to hash, typically an order id.

    Returns:
        Base58-encoded 32-byte digest.
    """
    digest = hashlib.sha256(data.encode("utf-8")).digest()
    return base58.b58encode(digest).decode("ascii")


def validate_reference(reference: str) -> bool:
    """Check that a reference decodes to exactly 32 bytes.

    Args:
        reference: Candidate reference ID.

    Returns:
        True if the reference is valid base58 of the right length, False otherwise.
    """
    if not isinstance(reference, str) or not reference:
        return False

    try:
        decoded = base58.b58decode(reference)
    except ValueError:
        return False

    return len(decoded) == REFERENCE_LENGTH
