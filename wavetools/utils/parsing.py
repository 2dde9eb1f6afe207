"""wavetools - Permissive integer parsing.

Leading-digits coercion: take the leading digits of a token and ignore the
rest; a token without leading digits is zero.
"""

import re

_SIGNED_PREFIX = re.compile(r"\s*([+-]?)(\d+)")
_UNSIGNED_PREFIX = re.compile(r"\s*\+?(\d+)")


def lenient_int(text: str, *, signed: bool = True) -> int:
    """Coerce text to an integer from its leading digits.

    Args:
        text: Token to coerce.
        signed: Accept a leading minus sign. When False, a token starting
            with "-" has no leading digits and coerces to 0.

    Returns:
        The integer value of the leading digits, or 0 if there are none.
    """
    if signed:
        match = _SIGNED_PREFIX.match(text)
        if not match:
            return 0
        value = int(match.group(2))
        return -value if match.group(1) == "-" else value

    match = _UNSIGNED_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def is_digits(text: str) -> bool:
    """Check that text is one or more ASCII digits and nothing else."""
    return bool(text) and text.isascii() and text.isdigit()
