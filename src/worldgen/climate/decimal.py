"""Exact decimal-string to fixed-point conversion."""

import re

from ..exceptions import DecimalFormatError

_DECIMAL = re.compile(r"([+-]?)(\d+)(?:\.(\d*))?")

# Climate parameters use four decimal places.
CLIMATE_PRECISION = 4


def decimal_to_fixed(text: str, precision: int = CLIMATE_PRECISION) -> int:
    """Scale a decimal literal by ``10 ** precision`` without going through float.

    Digits past ``precision`` are truncated.

    >>> decimal_to_fixed("3.05", 4)
    30500
    >>> decimal_to_fixed("-1.2", 4)
    -12000

    Raises:
        DecimalFormatError: If ``text`` is not a plain decimal literal.
    """
    match = _DECIMAL.fullmatch(text.strip())
    if match is None:
        raise DecimalFormatError(f'Invalid decimal literal: "{text}"')
    sign, whole, fraction = match.groups()
    fraction = (fraction or "")[:precision].ljust(precision, "0")
    value = int(whole) * 10**precision + (int(fraction) if fraction else 0)
    return -value if sign == "-" else value
