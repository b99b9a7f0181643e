from abc import ABCMeta
from typing import Any

from geom.kinds import ScalarKind


class Vector(metaclass=ABCMeta):
    """Marker base for fixed-size vector types.

    Foreign vector classes can be recognized with ``Vector.register(cls)``;
    they must expose a ``kind`` attribute.
    """

    __slots__ = ()
    dimension = 0


def is_vector(obj: Any) -> bool:
    return isinstance(obj, Vector)


def is_vector2(obj: Any) -> bool:
    return is_vector(obj) and getattr(obj, "dimension", None) == 2


def vector_kind(obj: Any) -> ScalarKind:
    """Scalar kind of a vector instance or specialized vector class."""
    kind = getattr(obj, "kind", None)
    if not isinstance(kind, ScalarKind):
        raise TypeError(f"{obj!r} has no scalar kind")
    return kind
