"""Depth pass computation shared by the cutting and pocketing planners."""

import math

from routerpath.exceptions import InvalidConfigurationError

# Absorbs round-off in depth / pass_depth (1.0 / 0.1 must give 10 passes)
_PASS_EPSILON = 1e-9


def depth_passes(depth: float, pass_depth: float) -> list[float]:
    """Return the Z height of every depth pass, shallowest first.

    Each pass goes ``pass_depth`` deeper than the previous one; the last pass
    is clamped to exactly ``-depth``. There are ``ceil(depth / pass_depth)``
    passes.

    Args:
        depth: Total depth of the cut (positive)
        pass_depth: Depth removed by one pass (positive)

    Returns:
        Negative Z values, the last one equal to ``-depth``

    Raises:
        InvalidConfigurationError: If pass_depth is not positive or depth is
            negative
    """
    if pass_depth <= 0:
        raise InvalidConfigurationError(f"Pass depth must be positive, got {pass_depth}")
    if depth < 0:
        raise InvalidConfigurationError(f"Depth must not be negative, got {depth}")

    count = math.ceil(depth / pass_depth - _PASS_EPSILON)
    passes = [-min(k * pass_depth, depth) for k in range(1, count + 1)]
    if passes:
        passes[-1] = -depth
    return passes
