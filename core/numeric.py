"""Fixed-width integer types for factorial storage and indexing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Union

from core.exceptions import NumericTypeError


@dataclass(frozen=True)
class IntegerType:
    """A two's complement integer of a fixed bit width."""

    name: str
    bits: int
    signed: bool

    def __post_init__(self):
        if self.bits <= 0:
            raise NumericTypeError(f"{self.name}: bit width must be positive, got {self.bits}")

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def wrap(self, value: int) -> int:
        """
        Truncate ``value`` to this width, the way native integer arithmetic does.

        Args:
            value: Arbitrary Python integer.

        Returns:
            The value modulo 2**bits, reinterpreted as signed when needed.
        """
        mask = (1 << self.bits) - 1
        value &= mask
        if self.signed and value > self.max_value:
            value -= 1 << self.bits
        return value

    def divide(self, dividend: int, divisor: int) -> int:
        """Integer division truncating toward zero."""
        quotient = abs(dividend) // abs(divisor)
        if (dividend < 0) != (divisor < 0):
            quotient = -quotient
        return quotient

    def __str__(self) -> str:
        return self.name


def _register(*types: IntegerType) -> Dict[str, IntegerType]:
    return {t.name: t for t in types}


INTEGER_TYPES: Dict[str, IntegerType] = _register(
    IntegerType("int8", 8, True),
    IntegerType("uint8", 8, False),
    IntegerType("int16", 16, True),
    IntegerType("uint16", 16, False),
    IntegerType("int32", 32, True),
    IntegerType("uint32", 32, False),
    IntegerType("int64", 64, True),
    IntegerType("uint64", 64, False),
    IntegerType("int128", 128, True),
    IntegerType("uint128", 128, False),
)

# Names accepted for types that exist but cannot hold a factorial.
NON_INTEGRAL_NAMES = {"float", "float16", "float32", "float64", "double", "decimal", "complex", "bool"}


def resolve_integer_type(spec: Union[str, IntegerType]) -> IntegerType:
    """
    Turn a type name (or an ``IntegerType``) into an ``IntegerType``.

    Args:
        spec: Registered name such as ``"uint64"``, or an ``IntegerType``.

    Returns:
        The matching IntegerType.

    Raises:
        NumericTypeError: If the type is not integral or is unknown.
    """
    if isinstance(spec, IntegerType):
        return spec
    if not isinstance(spec, str):
        raise NumericTypeError(f"Bad factorial type {spec!r}: expected an integer type name")

    name = spec.strip().lower()
    if name in INTEGER_TYPES:
        return INTEGER_TYPES[name]
    if name in NON_INTEGRAL_NAMES:
        raise NumericTypeError(f"Bad factorial type '{spec}': not an integral type")
    known = ", ".join(INTEGER_TYPES)
    raise NumericTypeError(f"Unknown integer type '{spec}'. Known types: {known}")
