"""Scalar kinds a vector can be parameterized over.

A kind pairs a conversion callable with enough metadata for the promotion
rules to pick a result kind. The builtin kinds wrap numpy scalar types, so
conversions and overflow follow numpy's native semantics.
"""

import math
from abc import ABCMeta
from typing import Any, Callable, Optional

import numpy as np


class FloatingPoint(metaclass=ABCMeta):
    """Capability tag for scalar types with floating point semantics.

    Custom numeric types opt in with ``FloatingPoint.register(cls)``.
    """


FloatingPoint.register(float)
FloatingPoint.register(np.floating)


def is_floating_point(value_or_type: Any) -> bool:
    cls = value_or_type if isinstance(value_or_type, type) else type(value_or_type)
    return issubclass(cls, FloatingPoint)


class ScalarKind:
    __slots__ = ("name", "type", "dtype", "weak", "_convert", "_sqrt")

    def __init__(
        self,
        name: str,
        type: Callable[[Any], Any],
        dtype: Optional[np.dtype] = None,
        weak: bool = False,
        convert: Optional[Callable[[Any], Any]] = None,
        sqrt: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self.name = name
        self.type = type
        self.dtype = np.dtype(dtype) if dtype is not None else None
        self.weak = weak
        self._convert = convert or type
        self._sqrt = sqrt

    @property
    def is_floating(self) -> bool:
        return isinstance(self.type, type) and issubclass(self.type, FloatingPoint)

    @property
    def is_integral(self) -> bool:
        return self.dtype is not None and self.dtype.kind in "iu"

    @property
    def concrete(self) -> "ScalarKind":
        """The kind a weak (Python literal) kind materializes as."""
        if not self.weak:
            return self
        return FLOAT64 if self.is_floating else INT64

    def cast(self, value: Any) -> Any:
        kind = self.concrete
        if kind.is_integral and isinstance(value, int):
            value = kind._wrap(value)
        return kind._convert(value)

    def _wrap(self, value: int) -> int:
        """Reduce a Python int modulo the kind's width, as a C integer cast does."""
        bits = self.dtype.itemsize * 8
        value %= 1 << bits
        if self.dtype.kind == "i" and value >= 1 << (bits - 1):
            value -= 1 << bits
        return value

    def sqrt(self, value: Any) -> Any:
        if self._sqrt is not None:
            return self._sqrt(value)
        if self.dtype is not None:
            return self.type(np.sqrt(value))
        return self.cast(math.sqrt(value))

    def divide(self, a: Any, b: Any) -> Any:
        """Divide two values of this kind with the kind's native semantics.

        Integer kinds divide C-style, truncating toward zero, and raise
        ZeroDivisionError on a zero divisor.
        """
        if not self.is_integral:
            return self.cast(a / b)
        a, b = int(a), int(b)
        if b == 0:
            raise ZeroDivisionError("integer division by zero")
        q = abs(a) // abs(b)
        return self.cast(-q if (a < 0) != (b < 0) else q)

    def __repr__(self) -> str:
        return f"ScalarKind({self.name})"


INT32 = ScalarKind("int32", np.int32, np.int32)
UINT32 = ScalarKind("uint32", np.uint32, np.uint32)
INT64 = ScalarKind("int64", np.int64, np.int64)
UINT64 = ScalarKind("uint64", np.uint64, np.uint64)
FLOAT32 = ScalarKind("float32", np.float32, np.float32)
FLOAT64 = ScalarKind("float64", np.float64, np.float64)

# Python int/float literals: they adopt the kind of the other operand.
WEAK_INT = ScalarKind("int", int, weak=True)
WEAK_FLOAT = ScalarKind("float", float, weak=True)

BUILTIN_KINDS = (INT32, UINT32, INT64, UINT64, FLOAT32, FLOAT64)
