"""
Digest primitive for content tags.

The rendering is base64 over the *hex* form of the hash, not over the raw
hash bytes. That is how previously issued tags were built, so it must stay
this way for them to keep matching:

    sha1(b"deno911").hexdigest()   -> "22d1fe9c9d1f9b78d4c4..."
    base64(that hex string)        -> "MjJkMWZlOWM5ZDFmOWI3OGQ0YzR..."
"""

import base64
import hashlib


def digest(data: bytes, algorithm: str = "sha1") -> str:
    """
    Hash data and return the base64 rendering used in content tags.

    Args:
        data: Bytes to hash.
        algorithm: Any name hashlib.new() accepts.

    Returns:
        Base64 text (ASCII). Callers truncate it to the tag length.
    """
    hex_digest = hashlib.new(algorithm, data).hexdigest()
    return base64.b64encode(hex_digest.encode("ascii")).decode("ascii")
