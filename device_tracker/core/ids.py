"""Record identifier generation.

Devices, staff members and wards are keyed by opaque strings. Clients never
parse them; they only need to be unique. We build them from the current time
in milliseconds (base 36) followed by a random base-36 suffix, which keeps
them short, roughly time ordered and collision free for practical purposes.
"""

from __future__ import annotations

import secrets
import string
import time

__all__ = ["new_id"]

_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 11


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def new_id() -> str:
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return _to_base36(millis) + suffix
