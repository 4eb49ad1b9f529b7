import re
from typing import Optional

_SEPARATORS = re.compile(r"[\s+\-.]")


def normalize_phone(raw: Optional[str], digits: int = 9, country_code: str = "244") -> Optional[str]:
    """
    Return the national number for ``raw`` or ``None`` when it is not valid.

    Whitespace, ``+``, ``-`` and dots are dropped and a leading country code
    is removed when the rest has exactly ``digits`` digits.

    >>> normalize_phone("+244 923-456.789")
    '923456789'
    >>> normalize_phone("12") is None
    True
    """
    if not raw:
        return None
    number = _SEPARATORS.sub("", str(raw))
    if country_code and number.startswith(country_code) and len(number) == digits + len(country_code):
        number = number[len(country_code):]
    if len(number) != digits or not number.isdigit():
        return None
    return number
