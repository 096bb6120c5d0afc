"""Parsing of command line values into integers of the parse type."""

from __future__ import annotations

import re

from core.exceptions import ArgumentRangeError, ArgumentSyntaxError
from core.numeric import IntegerType

_INTEGER_RE = re.compile(r"\s*([+-]?)0*([0-9]+)\s*")


def parse_argument(position: int, text: str, parse_type: IntegerType) -> int:
    """
    Parse one command line value.

    The whole text must be an integer: optional surrounding whitespace, an
    optional sign and ASCII digits. Unlike ``std::stoi``, a leading number
    followed by other characters (``"12abc"``, ``"3.5"``) is rejected rather
    than truncated to its prefix.

    Args:
        position: 1-based position of the value on the command line.
        text: Raw argument text.
        parse_type: Integer type the value must fit.

    Returns:
        The parsed integer (may be negative).

    Raises:
        ArgumentSyntaxError: If the text is not an integer.
        ArgumentRangeError: If the integer does not fit ``parse_type``.
    """
    match = _INTEGER_RE.fullmatch(text)
    if not match:
        raise ArgumentSyntaxError(position, text, f"Argument {position} = `{text}` isn't an integer.")

    sign, digits = match.groups()
    # Longer digit strings cannot fit and may exceed int()'s conversion limit.
    max_digits = len(str(max(parse_type.max_value, -parse_type.min_value)))
    if len(digits) > max_digits or not parse_type.contains(int(sign + digits)):
        raise ArgumentRangeError(
            position, text, f"Argument {position} = {text} is out of the '{parse_type.name}' range."
        )
    return int(sign + digits)
