"""Numeric primitives shared by the host-side geometry.

This module provides the square-root routine used by vector lengths and the
ray-sphere intersection, together with the interval constants used for
primary ray queries.

The square root is a Newton-Raphson iteration started from a power-of-two
guess, so it converges in a handful of steps for any finite positive input.
It is accurate to within ~100 machine epsilons of the correctly rounded
result, which is all the intersection math requires.

Example:
    >>> from src.raysphere.core.numeric import newton_sqrt
    >>> newton_sqrt(0.25)
    0.5
"""

import math
import sys

# Smallest increment above 1.0 for doubles, used as the lower bound of
# primary ray hit intervals to avoid self-intersection at t ~ 0
EPSILON = sys.float_info.epsilon

INFINITY = math.inf

# Stop once successive estimates differ by less than this relative amount
SQRT_TOLERANCE = 100.0 * EPSILON

# A power-of-two initial guess is within a factor of two of the root,
# Newton-Raphson then needs at most ~6 steps in double precision
SQRT_MAX_ITERATIONS = 16


def newton_sqrt(value: float) -> float:
    """Compute the square root of value using Newton-Raphson iteration.

    Args:
        value: The input value.

    Returns:
        The square root of value. NaN for negative inputs. The input itself
        for 0, 1, positive infinity and NaN.
    """
    if value < 0.0:
        return math.nan
    if value == 0.0 or value == 1.0 or math.isinf(value) or math.isnan(value):
        return value

    # frexp gives value = m * 2**e with m in [0.5, 1), so 2**(e // 2) is
    # within a factor of two of the root
    _, exponent = math.frexp(value)
    result = math.ldexp(1.0, exponent // 2)

    for _ in range(SQRT_MAX_ITERATIONS):
        last = result
        result = 0.5 * (result + value / result)
        if abs(result - last) < SQRT_TOLERANCE * result:
            break

    return result
