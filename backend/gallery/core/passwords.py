"""Password Hashing: bcrypt via passlib, salted and constant-time compared.

Invariants:
    - Plaintext passwords never leave this module in any form but a bcrypt hash
    - Cost factor is at least 10 rounds
    - dummy_verify() costs the same as a real verification (login timing parity)
"""

from functools import lru_cache

from passlib.context import CryptContext

MIN_BCRYPT_ROUNDS = 10


@lru_cache
def _context(rounds: int) -> CryptContext:
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=max(rounds, MIN_BCRYPT_ROUNDS),
    )


def hash_password(password: str, rounds: int = MIN_BCRYPT_ROUNDS) -> str:
    return _context(rounds).hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash.

    Malformed hashes count as a mismatch rather than an error.
    """
    try:
        return _context(MIN_BCRYPT_ROUNDS).verify(password, password_hash)
    except ValueError:
        return False


def dummy_verify() -> None:
    """Burn one verification's worth of time for unknown usernames."""
    _context(MIN_BCRYPT_ROUNDS).dummy_verify()
