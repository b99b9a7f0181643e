"""Two dimensional vector parameterized over a scalar kind.

``Vector2[kind]`` (or ``Vector2.of(kind)``) is the vector class for one scalar
kind; the ``Vec2i``/``Vec2u``/``Vec2l``/``Vec2ul``/``Vec2f``/``Vec2d`` aliases
cover the builtin kinds. Binary operations pick their result kind through
``geom.promotion`` and never modify their operands.

Numeric edge cases are left to the scalar kind: normalizing a zero vector
gives NaN components (numpy warns), float division by zero gives inf or NaN,
integer division by zero raises ZeroDivisionError and integer overflow wraps
as numpy wraps it.
"""

import logging
import operator
from typing import Any, Callable, ClassVar, Dict, Iterator, Optional, Union

import numpy as np

from geom.errors import VectorTypeError
from geom.kinds import FLOAT32, FLOAT64, INT32, INT64, UINT32, UINT64, ScalarKind, is_floating_point
from geom.promotion import kind_of, promote, promote_values, resolve_kind
from geom.traits import Vector, is_vector, is_vector2
from geom.util import DEFAULT_KIND_NAME

logger = logging.getLogger(__name__)

Scalar = Union[int, float, np.number]

_specializations: Dict[ScalarKind, type] = {}


def _infer_kind(x: Any, y: Any) -> ScalarKind:
    if x is None and y is None:
        return resolve_kind(DEFAULT_KIND_NAME)
    if y is None and is_vector2(x):
        return x.kind
    if x is None or y is None:
        raise TypeError("Vector2 takes no arguments, a vector, or two scalars")
    return promote_values((x, y))


class Vector2(Vector):
    __slots__ = ("_x", "_y")

    dimension = 2
    kind: ClassVar[Optional[ScalarKind]] = None

    def __new__(cls, x: Any = None, y: Any = None) -> "Vector2":
        if cls.kind is None:
            cls = cls.of(_infer_kind(x, y))
        return super().__new__(cls)

    def __init__(self, x: Any = None, y: Any = None) -> None:
        if x is None and y is None:
            x, y = 0, 0
        elif y is None and is_vector2(x):
            x, y = x.x, x.y
        elif x is None or y is None:
            raise TypeError("Vector2 takes no arguments, a vector, or two scalars")
        elif is_vector(x) or is_vector(y):
            raise VectorTypeError("Vector2 components must be scalars")
        self._x = self.kind.cast(x)
        self._y = self.kind.cast(y)

    @classmethod
    def of(cls, spec: Any) -> type:
        """The Vector2 class specialized for a scalar kind."""
        kind = resolve_kind(spec)
        specialized = _specializations.get(kind)
        if specialized is None:
            namespace = {"__slots__": (), "__module__": __name__, "kind": kind}
            specialized = type(Vector2)(f"Vector2[{kind.name}]", (Vector2,), namespace)
            _specializations[kind] = specialized
            logger.debug("created Vector2 specialization for %s", kind.name)
        return specialized

    def __class_getitem__(cls, spec: Any) -> type:
        return cls.of(spec)

    # -------------------------------------------------------------------------
    #  Components
    # -------------------------------------------------------------------------
    @property
    def x(self) -> Any:
        return self._x

    @x.setter
    def x(self, value: Any) -> None:
        self._x = self.kind.cast(value)

    @property
    def y(self) -> Any:
        return self._y

    @y.setter
    def y(self, value: Any) -> None:
        self._y = self.kind.cast(value)

    def assign(self, source: "Vector2") -> "Vector2":
        """Overwrite both components from ``source``, converted to this kind."""
        if not is_vector2(source):
            raise VectorTypeError(f"cannot assign {source!r} to a Vector2")
        self._x = self.kind.cast(source.x)
        self._y = self.kind.cast(source.y)
        return self

    def copy(self) -> "Vector2":
        return type(self)(self)

    # -------------------------------------------------------------------------
    #  Arithmetic
    # -------------------------------------------------------------------------
    def __neg__(self) -> "Vector2":
        return negate(self)

    def __add__(self, other: "Vector2") -> "Vector2":
        if not is_vector2(other):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        if not is_vector2(other):
            return NotImplemented
        return sub(self, other)

    def __mul__(self, other: Union["Vector2", Scalar]) -> "Vector2":
        if is_vector2(other):
            return mul(self, other)
        if is_vector(other):
            return NotImplemented
        return scalar_mul(self, other)

    def __rmul__(self, other: Scalar) -> "Vector2":
        return scalar_mul(other, self)

    def __truediv__(self, other: Union["Vector2", Scalar]) -> "Vector2":
        if is_vector2(other):
            return div(self, other)
        if is_vector(other):
            return NotImplemented
        return scalar_div(self, other)

    def __iadd__(self, other: "Vector2") -> "Vector2":
        return self.assign(add(self, other))

    def __isub__(self, other: "Vector2") -> "Vector2":
        return self.assign(sub(self, other))

    def __imul__(self, other: Scalar) -> "Vector2":
        return self.assign(scalar_mul(self, other))

    def __itruediv__(self, other: Scalar) -> "Vector2":
        return self.assign(scalar_div(self, other))

    # -------------------------------------------------------------------------
    #  Comparison (componentwise, a partial order)
    # -------------------------------------------------------------------------
    __hash__ = None

    def __eq__(self, other: object) -> bool:
        if not is_vector2(other):
            return NotImplemented
        return bool(self._x == other.x and self._y == other.y)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __gt__(self, other: "Vector2") -> bool:
        if not is_vector2(other):
            return NotImplemented
        return bool(self._x > other.x and self._y > other.y)

    def __ge__(self, other: "Vector2") -> bool:
        if not is_vector2(other):
            return NotImplemented
        return bool(self._x >= other.x and self._y >= other.y)

    def __lt__(self, other: "Vector2") -> bool:
        if not is_vector2(other):
            return NotImplemented
        return bool(self._x < other.x and self._y < other.y)

    def __le__(self, other: "Vector2") -> bool:
        if not is_vector2(other):
            return NotImplemented
        return bool(self._x <= other.x and self._y <= other.y)

    # -------------------------------------------------------------------------
    #  Sequence / numpy interop
    # -------------------------------------------------------------------------
    # numpy scalars hand binary operators back to Vector2.
    __array_ufunc__ = None

    def __iter__(self) -> Iterator[Any]:
        return iter((self._x, self._y))

    def __getitem__(self, i: int) -> Any:
        if i == 0:
            return self._x
        elif i == 1:
            return self._y
        raise IndexError(f"Vector2 index out of range: {i}")

    def __len__(self) -> int:
        return 2

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array([self._x, self._y], dtype=dtype if dtype is not None else self.kind.dtype)

    def __repr__(self) -> str:
        return f"Vector2[{self.kind.name}]({self._x}, {self._y})"


Vec2i = Vector2.of(INT32)
Vec2u = Vector2.of(UINT32)
Vec2l = Vector2.of(INT64)
Vec2ul = Vector2.of(UINT64)
Vec2f = Vector2.of(FLOAT32)
Vec2d = Vector2.of(FLOAT64)


# -----------------------------------------------------------------------------
#  Helpers
# -----------------------------------------------------------------------------
def _check(v: Any, op: str) -> None:
    if not is_vector2(v):
        raise VectorTypeError(f"{op}() expects Vector2 operands, got {type(v).__name__}")


def _as_kind(v: Vector2, kind: ScalarKind) -> Vector2:
    return v if v.kind is kind else Vector2.of(kind)(v)


def element_wise(f: Callable[[Any], Any], v: Vector2, kind: Optional[ScalarKind] = None) -> Vector2:
    kind = kind or v.kind
    return Vector2.of(kind)(f(v.x), f(v.y))


def element_wise2(
    f: Callable[[Any, Any], Any], v1: Vector2, v2: Vector2, kind: Optional[ScalarKind] = None
) -> Vector2:
    """Apply ``f`` to matching components after converting both to the promoted kind."""
    kind = kind or promote(v1.kind, v2.kind)
    v1, v2 = _as_kind(v1, kind), _as_kind(v2, kind)
    return Vector2.of(kind)(f(v1.x, v2.x), f(v1.y, v2.y))


# -----------------------------------------------------------------------------
#  Arithmetic
# -----------------------------------------------------------------------------
def negate(v: Vector2) -> Vector2:
    _check(v, "negate")
    return element_wise(operator.neg, v)


def add(a: Vector2, b: Vector2) -> Vector2:
    _check(a, "add")
    _check(b, "add")
    return element_wise2(operator.add, a, b)


def sub(a: Vector2, b: Vector2) -> Vector2:
    _check(a, "sub")
    _check(b, "sub")
    return element_wise2(operator.sub, a, b)


def mul(a: Vector2, b: Vector2) -> Vector2:
    """Piecewise product."""
    _check(a, "mul")
    _check(b, "mul")
    return element_wise2(operator.mul, a, b)


def div(a: Vector2, b: Vector2) -> Vector2:
    """Piecewise quotient, divided the way the promoted kind divides."""
    _check(a, "div")
    _check(b, "div")
    kind = promote(a.kind, b.kind)
    return element_wise2(kind.divide, a, b, kind)


def scalar_mul(a: Union[Vector2, Scalar], b: Union[Vector2, Scalar]) -> Vector2:
    """Scale a vector by a scalar; the operands may come in either order."""
    if is_vector(a) and is_vector(b):
        raise VectorTypeError("Multiplication not defined for the given types")
    v, c = (a, b) if is_vector(a) else (b, a)
    _check(v, "scalar_mul")
    kind = promote(v.kind, kind_of(c))
    c = kind.cast(c)
    return element_wise(lambda t: kind.cast(t) * c, v, kind)


def scalar_div(v: Vector2, c: Scalar) -> Vector2:
    if is_vector(c):
        raise VectorTypeError("Division not defined for the given types")
    _check(v, "scalar_div")
    kind = promote(v.kind, kind_of(c))
    c = kind.cast(c)
    return element_wise(lambda t: kind.divide(kind.cast(t), c), v, kind)


# -----------------------------------------------------------------------------
#  Geometry
# -----------------------------------------------------------------------------
def length(v: Vector2) -> Any:
    """Euclidean length.

    Floating kinds are measured in their own precision, so a float32 vector
    has a float32 length. Any other kind is converted to float64 first.
    """
    _check(v, "length")
    if not v.kind.is_floating:
        v = _as_kind(v, FLOAT64)
    return v.kind.sqrt(v.x * v.x + v.y * v.y)


def dot(a: Vector2, b: Vector2) -> Any:
    _check(a, "dot")
    _check(b, "dot")
    kind = promote(a.kind, b.kind)
    a, b = _as_kind(a, kind), _as_kind(b, kind)
    return kind.cast(a.x * b.x + a.y * b.y)


def normalize(v: Vector2) -> Vector2:
    """``v / length(v)``; a zero vector yields NaN components."""
    _check(v, "normalize")
    v = _as_kind(v, v.kind if v.kind.is_floating else FLOAT64)
    return scalar_div(v, length(v))


def reflect(incident: Vector2, normal: Vector2) -> Vector2:
    """Reflect ``incident`` about ``normal``: ``i - 2 * dot(i, n) * n``."""
    _check(incident, "reflect")
    _check(normal, "reflect")
    kind = promote(incident.kind, normal.kind)
    i, n = _as_kind(incident, kind), _as_kind(normal, kind)
    return sub(i, scalar_mul(kind.cast(2) * dot(i, n), n))


def refract(incident: Vector2, normal: Vector2, eta: Scalar) -> Vector2:
    """Refract ``incident`` through a surface with ``normal`` and index ``eta``.

    With ``k = 1 - eta**2 * (1 - dot(n, i)**2)`` the result is the zero vector
    when ``k < 0`` (total internal reflection), otherwise
    ``eta * i - (eta * dot(n, i) + sqrt(k)) * n``. The result kind promotes
    eta's kind with both vector kinds. ``eta`` must be a floating point value;
    custom types qualify after ``FloatingPoint.register``.
    """
    if not is_floating_point(eta):
        raise VectorTypeError("The type of a refraction index must be floating point")
    _check(incident, "refract")
    _check(normal, "refract")
    kind = promote(kind_of(eta), incident.kind, normal.kind)
    i, n = _as_kind(incident, kind), _as_kind(normal, kind)
    eta = kind.cast(eta)
    one = kind.cast(1)

    dot_ni = dot(n, i)
    k = one - eta * eta * (one - dot_ni * dot_ni)
    if k < 0:
        return Vector2.of(kind)()
    return sub(scalar_mul(eta, i), scalar_mul(eta * dot_ni + kind.sqrt(k), n))
