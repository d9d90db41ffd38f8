"""Time-based one-time passwords (RFC 6238) for INWX two-factor login."""
import base64
import hashlib
import hmac
import struct
import time
from typing import Optional


def generate_totp(
    secret: str,
    for_time: Optional[float] = None,
    digits: int = 6,
    interval: int = 30,
) -> str:
    """
    Compute the TOTP code for a base32 shared secret.

    Args:
        secret: Base32 secret as shown by the authenticator setup
        for_time: Unix timestamp (defaults to now)
        digits: Code length
        interval: Time step in seconds

    Returns:
        Zero-padded numeric code
    """
    normalized = secret.replace(" ", "").upper()
    # base32 requires padding to a multiple of 8
    normalized += "=" * (-len(normalized) % 8)
    key = base64.b32decode(normalized)

    timestamp = time.time() if for_time is None else for_time
    counter = int(timestamp // interval)
    digest = hmac.new(key, struct.pack(">Q", counter), hashlib.sha1).digest()

    offset = digest[-1] & 0x0F
    code = struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF
    return str(code % (10 ** digits)).zfill(digits)
