"""Shared pytest fixtures for geom tests."""

from fractions import Fraction

import numpy as np
import pytest

from geom.kinds import INT32, ScalarKind
from geom.promotion import register_kind, register_rule
from geom.vector2 import Vec2d, Vec2f, Vec2i


# =============================================================================
# Vector Fixtures
# =============================================================================


@pytest.fixture
def int_vec() -> Vec2i:
    return Vec2i(1, 2)


@pytest.fixture
def double_vec() -> Vec2d:
    return Vec2d(1.1, 2.2)


@pytest.fixture
def float_vec() -> Vec2f:
    """3-4-5 triangle, exact in single precision."""
    return Vec2f(3, 4)


# =============================================================================
# Numeric Environment
# =============================================================================


@pytest.fixture
def quiet_numpy():
    """Silence numpy's divide/invalid warnings for edge-case tests."""
    with np.errstate(all="ignore"):
        yield


def to_fraction(value) -> Fraction:
    if isinstance(value, np.generic):
        value = value.item()
    return Fraction(value)


@pytest.fixture(scope="session")
def fraction_kind() -> ScalarKind:
    """A custom, exact scalar kind registered with the shared rules."""
    kind = register_kind(ScalarKind("fraction", Fraction, convert=to_fraction))
    register_rule(INT32, kind, kind)
    return kind
