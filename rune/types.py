"""Runtime values and integer helpers for Rune.

Numbers are 64-bit signed integers. Arithmetic wraps around on overflow
(two's complement), division truncates toward zero and the remainder
takes the sign of the dividend, so `a == (a / b) * b + a % b` holds for
every non-zero `b`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .ast import Expression
    from .environment import Scope


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_DIGITS = re.compile(r'[0-9]+')


class Value:
    """Base class for Rune runtime values."""
    pass


@dataclass(frozen=True, repr=False)
class NumberVal(Value):
    value: int

    def __repr__(self) -> str:
        return f"Number({self.value})"


@dataclass(frozen=True, repr=False)
class StringVal(Value):
    value: str

    def __repr__(self) -> str:
        return f"String({self.value})"


@dataclass(frozen=True, repr=False)
class FunctionVal(Value):
    """A closure: the body, its parameter and the scope it was created in.

    The scope is a persistent `Scope`, so later declarations in the
    defining scope are never visible to an already created closure.
    """
    body: 'Expression'
    parameter: str
    scope: 'Scope'

    def __repr__(self) -> str:
        return "Function"


@dataclass(frozen=True, repr=False)
class ErrorVal(Value):
    """Represents a Rune error value.

    Errors are first-class values: they can be bound, returned and
    inspected. Operators do not look inside them.
    """
    message: str

    def __repr__(self) -> str:
        return f"Error({self.message})"


def wrap_int64(n: int) -> int:
    """Reduce an arbitrary Python int to the int64 range (two's complement)."""
    n &= (1 << 64) - 1
    if n > INT64_MAX:
        n -= 1 << 64
    return n


def parse_int64(text: str) -> Optional[int]:
    """Parse a decimal literal; None if malformed or out of the int64 range."""
    if not _DIGITS.fullmatch(text):
        return None
    n = int(text)
    if n > INT64_MAX:
        return None
    return n


def truncating_divide(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return wrap_int64(q)


def truncating_modulo(a: int, b: int) -> int:
    return wrap_int64(a - b * truncating_divide(a, b))


def type_name(value: Any) -> str:
    if isinstance(value, NumberVal):
        return 'Number'
    if isinstance(value, StringVal):
        return 'String'
    if isinstance(value, FunctionVal):
        return 'Function'
    if isinstance(value, ErrorVal):
        return 'Error'
    return type(value).__name__
