"""Password hashing utilities using bcrypt.

Uses the ``bcrypt`` library directly (>=4.0).  passlib[bcrypt] is intentionally
avoided because passlib is unmaintained and incompatible with bcrypt >=4.

bcrypt is CPU-bound; both calls run in a worker thread so a slow hash does not
stall other in-flight requests on the event loop.

bcrypt only reads the first 72 bytes of a password, and bcrypt >=5 raises on
longer input instead of ignoring the rest. Candidates are cut to 72 UTF-8
bytes before hashing and before checking, so a long password is valid input
on every path.
"""

import asyncio

import bcrypt

from config.settings import settings
from src.erp_common.errors import InternalError

BCRYPT_ROUNDS = settings.BCRYPT_ROUNDS
BCRYPT_MAX_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash_sync(plain: str, rounds: int) -> str:
    hashed_bytes: bytes = bcrypt.hashpw(_password_bytes(plain), bcrypt.gensalt(rounds=rounds))
    return hashed_bytes.decode("utf-8")


async def hash_password(plain: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password with bcrypt. Returns a utf-8 hash string."""
    return await asyncio.to_thread(_hash_sync, plain, rounds)


async def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash.

    Raises:
        InternalError: the stored hash is not a valid bcrypt hash.
    """
    candidate = _password_bytes(plain)
    try:
        return await asyncio.to_thread(bcrypt.checkpw, candidate, hashed.encode("utf-8"))
    except ValueError as exc:
        raise InternalError("Stored credential is unreadable") from exc
