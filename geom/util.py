from typing import Any

import numpy as np

from geom.kinds import ScalarKind
from geom.promotion import promote

# Kind of an unparameterized Vector2() with no components to infer from.
DEFAULT_KIND_NAME = "float64"

# Float comparisons accept this many machine epsilons of error.
FLOAT_TOLERANCE_ULPS = 8


def tolerance(kind: ScalarKind, ulps: int = FLOAT_TOLERANCE_ULPS) -> float:
    """Tolerance for comparing values of the given kind (0 for integers)."""
    if kind.dtype is None or not kind.is_floating:
        return 0.0
    return ulps * float(np.finfo(kind.dtype).eps)


def isclose(a: Any, b: Any, kind: ScalarKind, ulps: int = FLOAT_TOLERANCE_ULPS) -> bool:
    tol = tolerance(kind, ulps)
    if tol == 0.0:
        return bool(a == b)
    return bool(np.isclose(a, b, rtol=tol, atol=tol))


def vectors_close(a, b, ulps: int = FLOAT_TOLERANCE_ULPS) -> bool:
    kind = promote(a.kind, b.kind)
    return isclose(a.x, b.x, kind, ulps) and isclose(a.y, b.y, kind, ulps)
