"""
Input Normalizer - strips formatting from user-typed CNPJs.
"""

import re
from typing import Optional

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize(raw: Optional[str]) -> str:
    """
    Remove every character that is not an ASCII digit.

    "11.222.333/0001-81" and " 11222333000181 " both become
    "11222333000181". Unicode digits from other scripts are removed too,
    so the result is always safe to feed to the checksum.

    Args:
        raw: Text as typed by the user (None is treated as empty)

    Returns:
        Digits only, in their original order
    """
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)
