"""
Basics Module

The opening stops of the tour:
- Unicode identifiers in ordinary code
- Closed-form circle formulas
- A summation helper taking a function argument
- A Fibonacci sequence generator
"""

import math
import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from langtour.config import DEFAULT_FIB_LENGTH


logger = logging.getLogger(__name__)

# Python identifiers may use any Unicode letter
π = math.pi
τ = 2 * π


# ============================================================
# CIRCLE FORMULAS
# ============================================================

@dataclass(frozen=True)
class CircleMetrics:
    radius: float
    area: float
    circumference: float


def circle_area(r: float) -> float:
    """Area of a circle with radius ``r``."""
    if r < 0:
        raise ValueError(f"Radius must be non-negative, got {r}")
    return π * r ** 2


def circle_circumference(r: float) -> float:
    """Circumference of a circle with radius ``r``."""
    if r < 0:
        raise ValueError(f"Radius must be non-negative, got {r}")
    return τ * r


def describe_circle(r: float) -> CircleMetrics:
    """
    Compute area and circumference for a radius.

    Example
    -------
    >>> describe_circle(2.0).area
    12.566370614359172
    """
    return CircleMetrics(radius=r, area=circle_area(r), circumference=circle_circumference(r))


def format_circle(metrics: CircleMetrics) -> str:
    return (
        f"r = {metrics.radius:g}: "
        f"area = {metrics.area:.4f}, circumference = {metrics.circumference:.4f}"
    )


def polar_to_cartesian(ρ: float, θ: float) -> Tuple[float, float]:
    """Convert polar coordinates (radius ρ, angle θ in radians) to (x, y)."""
    return ρ * math.cos(θ), ρ * math.sin(θ)


# ============================================================
# SUMMATION
# ============================================================

def f(x: float) -> float:
    return 2 * x + 4


def g(x: float) -> float:
    return x ** 2 + 4


def sum_function(func: Callable[[int], float], start: int, stop: int) -> float:
    """
    Apply ``func`` to every integer in [start, stop] and add the results.

    Parameters
    ----------
    func : callable
        Function of one integer argument
    start, stop : int
        Inclusive range bounds

    Returns
    -------
    float
        Sum of func(x) over the range

    Example
    -------
    >>> sum_function(f, 1, 10)
    150
    >>> sum_function(g, 1, 10)
    425
    """
    if start > stop:
        raise ValueError(f"Malformed range: start ({start}) is greater than stop ({stop})")

    total = 0
    for x in range(start, stop + 1):
        total += func(x)
    return total


# ============================================================
# FIBONACCI
# ============================================================

def fibonacci(n: int = DEFAULT_FIB_LENGTH) -> List[int]:
    """
    First ``n`` Fibonacci numbers, starting 0, 1.

    Parameters
    ----------
    n : int
        Sequence length, at least 2

    Returns
    -------
    list of int
        The sequence, each element after the second the sum of the two before it
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Sequence length must be an integer, got {type(n).__name__}")
    if n < 2:
        raise ValueError(f"Sequence length must be at least 2, got {n}")

    seq = [0, 1]
    for _ in range(n - 2):
        seq.append(seq[-1] + seq[-2])

    logger.debug("Generated %d Fibonacci numbers", n)
    return seq
