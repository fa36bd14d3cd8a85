"""
Integer <-> base-N string conversion for tag segments.

Python's int() rejects trailing garbage, while the tags we must read back
were written by implementations that parse the leading digits and ignore
the rest. parse_radix_prefix() reproduces that lenient behaviour.
"""

import re
from typing import Optional


DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

_PREFIX_PATTERN = re.compile(r"\s*([+-]?)([0-9a-zA-Z]+)")


def to_radix(value: int, radix: int = 16) -> str:
    """
    Render an integer in the given base, lowercase, no leading zeros.

        >>> to_radix(255)
        'ff'
        >>> to_radix(0)
        '0'
        >>> to_radix(-500)
        '-1f4'
    """
    if not 2 <= radix <= 36:
        raise ValueError(f"Invalid radix: {radix}. Must be 2-36.")

    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    value = abs(value)

    if radix == 16:
        return sign + format(value, "x")

    digits = []
    while value:
        value, remainder = divmod(value, radix)
        digits.append(DIGITS[remainder])
    return sign + "".join(reversed(digits))


def parse_radix_prefix(text: str, radix: int = 16) -> Optional[int]:
    """
    Parse the leading base-N digits of text.

    Returns None when text does not start with at least one valid digit,
    so callers can pick their own fallback.

        >>> parse_radix_prefix("1f-abc")
        31
        >>> parse_radix_prefix("zz", 16) is None
        True
    """
    match = _PREFIX_PATTERN.match(text)
    if not match:
        return None

    sign, candidate = match.groups()

    # Keep only the run of digits that are valid in this base
    end = 0
    for char in candidate.lower():
        if DIGITS.index(char) >= radix:
            break
        end += 1

    if end == 0:
        return None

    value = int(candidate[:end], radix)
    return -value if sign == "-" else value
