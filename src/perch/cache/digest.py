"""Content digests used as ETags.

SHA-256 over the raw body bytes, rendered as lowercase hex.
"""

import hashlib

import anyio.to_thread

# Bodies above this size are hashed off the event loop
THREAD_THRESHOLD = 64 * 1024


def digest(body: bytes) -> str:
    """Return the lowercase hex SHA-256 of *body*."""
    return hashlib.sha256(body).hexdigest()


async def digest_async(body: bytes) -> str:
    """Like ``digest``, but hashes large bodies in a worker thread."""
    if len(body) > THREAD_THRESHOLD:
        return await anyio.to_thread.run_sync(digest, body)
    return digest(body)
