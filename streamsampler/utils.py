"""Numeric helpers shared by the reservoir implementations.

Every formula that turns uniform draws into skip counts, jump weights or
priority keys lives here, together with the limiting cases for draws and keys
that saturate to exactly 0 or 1.  Results never carry NaN.
"""

from __future__ import annotations

import sys
from typing import Any

import numpy as np

# ---------------------------------------------------------------------------
# Internal constants
# ---------------------------------------------------------------------------

#: Upper bound for a skip count; stands in for an infinite skip.
MAX_SKIP: int = sys.maxsize

# ---------------------------------------------------------------------------
# Float types
# ---------------------------------------------------------------------------


def resolve_float_dtype(float_dtype: Any) -> type[np.floating]:
    """Return the numpy scalar type used for probability math.

    Args:
        float_dtype: Anything ``numpy.dtype`` understands (``"float32"``,
            ``np.float64``, ``float``...).

    Returns:
        The numpy floating scalar type, e.g. ``numpy.float64``.

    Raises:
        TypeError: If the dtype is unknown or not a floating-point type.
    """
    try:
        dtype = np.dtype(float_dtype)
    except TypeError as exc:
        raise TypeError(f"Unknown float dtype {float_dtype!r}") from exc
    if not np.issubdtype(dtype, np.floating):
        raise TypeError(f"float_dtype must be a floating-point type, got {dtype.name}")
    return dtype.type


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def log_uniform(u: float, ftype: type[np.floating]) -> np.floating:
    """Natural log of a uniform draw, with ``ln(0) = -inf``."""
    value = ftype(u)
    if value <= 0:
        return ftype(-np.inf)
    return np.log(value)


def jump_factor(u: float, capacity: int, ftype: type[np.floating]) -> np.floating:
    """Return ``exp(ln(u) / capacity)``, the Algorithm L weight multiplier."""
    return np.exp(log_uniform(u, ftype) / ftype(capacity))


def skip_count(weight_jump_over: np.floating, u: float, ftype: type[np.floating]) -> int:
    """Number of elements to pass over before the next Algorithm L admission.

    Computes ``floor(ln(u) / ln(1 - weight_jump_over))``.

    Limiting cases:
        * ``weight_jump_over >= 1``: ``ln(1 - w)`` is ``-inf``, so the skip is 0.
        * ``weight_jump_over <= 0`` or ``u == 0``: the skip is unbounded and is
          clamped to :data:`MAX_SKIP`.
    """
    if weight_jump_over >= 1:
        return 0
    if weight_jump_over <= 0:
        return MAX_SKIP
    with np.errstate(divide="ignore", under="ignore"):
        denominator = np.log1p(-ftype(weight_jump_over))
    if denominator == 0:
        return MAX_SKIP
    numerator = log_uniform(u, ftype)
    if not np.isfinite(numerator):
        return MAX_SKIP
    ratio = numerator / denominator
    if ratio >= MAX_SKIP:
        return MAX_SKIP
    return int(np.floor(ratio))


def priority_key(u: float, weight: float, ftype: type[np.floating]) -> np.floating:
    """Return the A-ExpJ key ``u ** (1 / weight)`` for a positive weight."""
    with np.errstate(over="ignore", under="ignore", divide="ignore"):
        exponent = ftype(1.0) / ftype(weight)
        return np.power(ftype(u), exponent)


def truncation_floor(min_priority: np.floating, weight: float, ftype: type[np.floating]) -> np.floating:
    """Lower bound ``min_priority ** weight`` for a replacement key draw."""
    with np.errstate(over="ignore", under="ignore"):
        return np.power(ftype(min_priority), ftype(weight))


def weight_jump(min_priority: np.floating, u: float, ftype: type[np.floating]) -> np.floating:
    """Weight that can stream past before the minimum key is challenged again.

    Computes ``ln(u) / ln(min_priority)``.

    Limiting cases:
        * ``min_priority <= 0``: any new element beats the minimum, so the
          jump is 0 and the next positive weight challenges immediately.
        * ``min_priority >= 1``: nothing can beat the minimum, so the jump is
          ``+inf`` and the minimum is never challenged.
    """
    if min_priority <= 0:
        return ftype(0.0)
    if min_priority >= 1:
        return ftype(np.inf)
    return log_uniform(u, ftype) / np.log(ftype(min_priority))


def remaining_jump(weight_jump_over: np.floating, weight: float, ftype: type[np.floating]) -> np.floating:
    """Subtract ``weight`` from the pending jump; ``inf - inf`` counts as a challenge."""
    with np.errstate(invalid="ignore", over="ignore"):
        remaining = ftype(weight_jump_over) - ftype(weight)
    if np.isnan(remaining):
        return ftype(-np.inf)
    return remaining
