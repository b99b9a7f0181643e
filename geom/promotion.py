"""Result-kind resolution for operations mixing scalar kinds.

The builtin kinds promote the way numpy promotes their dtypes, so mixing
int32 and float64 yields float64 and int32 with uint32 yields int64. Python
literals are weak: an ``int`` adopts the other kind, a ``float`` adopts a
floating kind and turns integer kinds into float64. Custom kinds take part
through explicitly registered rules. Nothing here depends on vector arity.
"""

import logging
from functools import reduce
from typing import Any, Dict, FrozenSet, Iterable, List

import numpy as np

from geom.errors import PromotionError, VectorTypeError
from geom.kinds import (
    BUILTIN_KINDS,
    FLOAT64,
    WEAK_FLOAT,
    WEAK_INT,
    ScalarKind,
)
from geom.traits import is_vector

logger = logging.getLogger(__name__)


class ScalarPromotionRules:
    def __init__(self) -> None:
        self._by_type: Dict[type, ScalarKind] = {}
        self._by_name: Dict[str, ScalarKind] = {}
        self._by_dtype: Dict[np.dtype, ScalarKind] = {}
        self._rules: Dict[FrozenSet[ScalarKind], ScalarKind] = {}

    # -------------------------------------------------------------------------
    #  Registration
    # -------------------------------------------------------------------------
    def register_kind(self, kind: ScalarKind) -> ScalarKind:
        self._by_type[kind.type] = kind
        if not kind.weak:
            self._by_name[kind.name] = kind
        if kind.dtype is not None and not kind.weak:
            self._by_dtype[kind.dtype] = kind
        logger.debug("registered scalar kind %s", kind.name)
        return kind

    def register_rule(self, a: ScalarKind, b: ScalarKind, result: ScalarKind) -> None:
        """Declare that combining ``a`` and ``b`` (in either order) yields ``result``."""
        self._rules[frozenset((a, b))] = result
        logger.debug("registered promotion %s + %s -> %s", a.name, b.name, result.name)

    # -------------------------------------------------------------------------
    #  Lookup
    # -------------------------------------------------------------------------
    def kind_of(self, value: Any) -> ScalarKind:
        """Kind of a scalar value."""
        if is_vector(value):
            raise VectorTypeError(f"{value!r} is a vector, not a scalar")
        return self._lookup_type(type(value))

    def resolve(self, spec: Any) -> ScalarKind:
        """Turn a kind name, numpy type/dtype, Python type or ScalarKind into a concrete kind."""
        if isinstance(spec, ScalarKind):
            return spec.concrete
        if isinstance(spec, str):
            try:
                return self._by_name[spec]
            except KeyError:
                raise PromotionError(f"Unknown scalar kind {spec!r}") from None
        if isinstance(spec, np.dtype):
            try:
                return self._by_dtype[spec]
            except KeyError:
                raise PromotionError(f"Unsupported dtype {spec}") from None
        if isinstance(spec, type):
            return self._lookup_type(spec).concrete
        raise PromotionError(f"Cannot interpret {spec!r} as a scalar kind")

    def _lookup_type(self, cls: type) -> ScalarKind:
        for base in cls.__mro__:
            kind = self._by_type.get(base)
            if kind is not None:
                return kind
        raise PromotionError(f"Unsupported scalar type {cls.__name__}")

    # -------------------------------------------------------------------------
    #  Promotion
    # -------------------------------------------------------------------------
    def promote(self, *kinds: ScalarKind) -> ScalarKind:
        """Result kind of combining all given kinds. Always a concrete kind."""
        if not kinds:
            raise PromotionError("promote() needs at least one kind")
        strong: List[ScalarKind] = [k for k in kinds if not k.weak]
        weak: List[ScalarKind] = [k for k in kinds if k.weak]
        # Strong kinds first, literals then only adjust the strong result.
        result = reduce(self._promote_pair, strong + weak)
        return result.concrete

    def promote_values(self, values: Iterable[Any]) -> ScalarKind:
        return self.promote(*(self.kind_of(v) for v in values))

    def _promote_pair(self, a: ScalarKind, b: ScalarKind) -> ScalarKind:
        if a is b:
            return a
        rule = self._rules.get(frozenset((a, b)))
        if rule is not None:
            return rule
        if a.weak and b.weak:
            return WEAK_FLOAT if (a.is_floating or b.is_floating) else WEAK_INT
        if a.weak or b.weak:
            strong, literal = (b, a) if a.weak else (a, b)
            if literal.is_floating and strong.dtype is not None and not strong.is_floating:
                return FLOAT64
            return strong
        if a.dtype is not None and b.dtype is not None:
            dtype = np.promote_types(a.dtype, b.dtype)
            kind = self._by_dtype.get(dtype)
            if kind is not None:
                return kind
        raise PromotionError(f"No promotion rule for {a.name} and {b.name}")


def _default_rules() -> ScalarPromotionRules:
    rules = ScalarPromotionRules()
    for kind in BUILTIN_KINDS:
        rules.register_kind(kind)
    rules.register_kind(WEAK_INT)
    rules.register_kind(WEAK_FLOAT)
    return rules


RULES = _default_rules()


def kind_of(value: Any) -> ScalarKind:
    return RULES.kind_of(value)


def resolve_kind(spec: Any) -> ScalarKind:
    return RULES.resolve(spec)


def promote(*kinds: ScalarKind) -> ScalarKind:
    return RULES.promote(*kinds)


def register_kind(kind: ScalarKind) -> ScalarKind:
    return RULES.register_kind(kind)


def register_rule(a: ScalarKind, b: ScalarKind, result: ScalarKind) -> None:
    RULES.register_rule(a, b, result)


def promote_values(values: Iterable[Any]) -> ScalarKind:
    return RULES.promote_values(values)
