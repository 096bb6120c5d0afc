"""Memoizing factorial engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import Lock
from typing import List, Optional, Tuple, Union

from core.exceptions import FactorialOverflowError, NegativeInputError, NumericTypeError
from core.numeric import IntegerType, resolve_integer_type


class FactorialStatus(Enum):
    OK = "ok"
    NEGATIVE_INPUT = "negative_input"
    OVERFLOW = "overflow"


@dataclass(frozen=True)
class FactorialResult:
    """Outcome of a single factorial computation."""

    n: int
    status: FactorialStatus
    value: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status is FactorialStatus.OK

    def unwrap(self) -> int:
        """
        Return the factorial value, raising if the computation failed.

        Raises:
            NegativeInputError: If ``n`` was negative.
            FactorialOverflowError: If ``n!`` does not fit the output type.
        """
        if self.status is FactorialStatus.NEGATIVE_INPUT:
            raise NegativeInputError(f"factorial is undefined for negative input {self.n}")
        if self.status is FactorialStatus.OVERFLOW:
            raise FactorialOverflowError(f"factorial of {self.n} overflows the output type")
        return self.value


class FactorialEngine:
    """
    Computes n! with a cache that grows on demand and is shared by all calls.

    ``cache[n]`` holds ``n!`` in the output type. Extension is iterative and
    every index is computed at most once over the engine's life. A step whose
    product wraps around is rejected before it reaches the cache, so smaller
    inputs keep working after an overflow.
    """

    def __init__(
        self,
        output_type: Union[str, IntegerType] = "uint64",
        input_type: Union[str, IntegerType, None] = None,
    ):
        """
        Initialize the engine.

        Args:
            output_type: Integer type the factorial values are stored in.
            input_type: Integer type of ``n``. Defaults to the output type.

        Raises:
            NumericTypeError: If either type is not integral, or the output
                type cannot hold 1.
        """
        self.output_type = resolve_integer_type(output_type)
        if self.output_type.max_value < 1:
            raise NumericTypeError(f"Bad factorial output type '{self.output_type.name}': cannot hold 1")
        self.input_type = resolve_integer_type(input_type if input_type is not None else self.output_type)
        self._cache: List[int] = [1, 1]
        self._lock = Lock()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @property
    def highest_index(self) -> int:
        return len(self._cache) - 1

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self._cache)

    def compute(self, n: int) -> FactorialResult:
        """
        Compute ``n!``.

        Args:
            n: Value of the input type.

        Returns:
            FactorialResult with status OK and the value, or a failure status.

        Raises:
            TypeError: If ``n`` is not an integer of the input type.
        """
        self._check_input(n)

        if n < 0:
            return FactorialResult(n=n, status=FactorialStatus.NEGATIVE_INPUT)

        if n < len(self._cache):
            return FactorialResult(n=n, status=FactorialStatus.OK, value=self._cache[n])

        with self._lock:
            if not self._extend_to(n):
                return FactorialResult(n=n, status=FactorialStatus.OVERFLOW)
            return FactorialResult(n=n, status=FactorialStatus.OK, value=self._cache[n])

    def _extend_to(self, n: int) -> bool:
        # Caller holds the lock.
        out = self.output_type
        while len(self._cache) <= n:
            last = self._cache[-1]
            next_index = len(self._cache)
            new_val = out.wrap(last * next_index)
            if out.divide(new_val, last) != next_index:
                return False
            self._cache.append(new_val)
        return True

    def _check_input(self, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"factorial input must be an integer, got {type(n).__name__}")
        if not self.input_type.contains(n):
            raise TypeError(f"factorial input {n} is not a valid {self.input_type.name}")
