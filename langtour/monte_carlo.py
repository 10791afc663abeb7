"""
Monte Carlo Module

Estimate π by sampling points in the unit square and counting those that
fall inside the quarter circle. The parallel variant splits the samples
across a worker pool and adds the partial counts.
"""

import time
import logging
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import List, Optional, Sequence, Type, Union

import numpy as np
import pandas as pd
from scipy.stats import norm

from langtour.config import CHUNK_SIZE, DEFAULT_SAMPLES, DEFAULT_WORKERS


logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.SeedSequence]


def _root_seed(seed: SeedLike) -> np.random.SeedSequence:
    """Fresh SeedSequence for ``seed``; a caller's SeedSequence is copied, never spawned from."""
    if isinstance(seed, np.random.SeedSequence):
        return np.random.SeedSequence(seed.entropy, spawn_key=seed.spawn_key, pool_size=seed.pool_size)
    return np.random.SeedSequence(seed)


def _check_samples(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise TypeError(f"Sample count must be an integer, got {type(n).__name__}")
    if n <= 0:
        raise ValueError(f"Sample count must be positive, got {n}")


# ============================================================
# SERIAL ESTIMATOR
# ============================================================

def count_inside(n: int, rng: np.random.Generator, chunk_size: int = CHUNK_SIZE) -> int:
    """
    Count how many of ``n`` uniform (x, y) pairs satisfy x² + y² <= 1.

    Parameters
    ----------
    n : int
        Number of pairs to draw
    rng : np.random.Generator
        Source of randomness
    chunk_size : int
        Pairs drawn per vectorised block (bounds memory use)

    Returns
    -------
    int
        Number of pairs inside the quarter circle
    """
    inside = 0
    remaining = n
    while remaining > 0:
        size = min(chunk_size, remaining)
        x = rng.random(size)
        y = rng.random(size)
        inside += int(np.count_nonzero(x * x + y * y <= 1.0))
        remaining -= size
    return inside


def estimate_pi(n: int = DEFAULT_SAMPLES, seed: SeedLike = None) -> float:
    """
    Serial Monte Carlo estimate of π.

    Example
    -------
    >>> estimate_pi(1_000_000, seed=42)  # doctest: +SKIP
    3.14...
    """
    _check_samples(n)
    rng = np.random.default_rng(seed)
    return 4.0 * count_inside(n, rng) / n


def estimate_pi_with_error(
    n: int = DEFAULT_SAMPLES,
    seed: SeedLike = None,
    confidence: float = 0.95
) -> dict:
    """
    Estimate π together with its standard error and a confidence interval.

    The success indicator is Bernoulli(p) with p = π/4, so the estimate
    4p̂ has standard error 4·sqrt(p̂(1 - p̂)/n).

    Parameters
    ----------
    n : int
        Number of samples
    seed : int or SeedSequence, optional
        Seed for reproducible runs
    confidence : float
        Two-sided confidence level in (0, 1)

    Returns
    -------
    dict
        Keys 'estimate', 'stderr', 'ci_low', 'ci_high', 'n'
    """
    _check_samples(n)
    if not 0 < confidence < 1:
        raise ValueError(f"Confidence must lie in (0, 1), got {confidence}")

    rng = np.random.default_rng(seed)
    p_hat = count_inside(n, rng) / n
    estimate = 4.0 * p_hat
    stderr = 4.0 * np.sqrt(p_hat * (1.0 - p_hat) / n)
    z = norm.ppf(0.5 + confidence / 2.0)

    return {
        'estimate': estimate,
        'stderr': float(stderr),
        'ci_low': float(estimate - z * stderr),
        'ci_high': float(estimate + z * stderr),
        'n': n,
    }


# ============================================================
# PARALLEL ESTIMATOR
# ============================================================

def partition_samples(n: int, workers: int) -> List[int]:
    """
    Split ``n`` samples into balanced, disjoint chunks.

    Chunk sizes differ by at most one and add up to ``n``. No more chunks
    than samples are produced.

    Example
    -------
    >>> partition_samples(10, 3)
    [4, 3, 3]
    """
    _check_samples(n)
    if workers <= 0:
        raise ValueError(f"Worker count must be positive, got {workers}")

    workers = min(workers, n)
    base, extra = divmod(n, workers)
    return [base + 1 if i < extra else base for i in range(workers)]


def _count_inside_worker(task) -> int:
    """Worker entry point: (sample count, SeedSequence) -> inside count."""
    n, seed_seq = task
    return count_inside(n, np.random.default_rng(seed_seq))


def estimate_pi_parallel(
    n: int = DEFAULT_SAMPLES,
    workers: Optional[int] = None,
    seed: SeedLike = None,
    executor_cls: Type[Executor] = ProcessPoolExecutor,
    executor: Optional[Executor] = None
) -> float:
    """
    Parallel Monte Carlo estimate of π.

    The sample range is partitioned across ``workers`` independent tasks,
    each with its own child seed. Partial counts are reduced with addition,
    so completion order does not matter.

    Parameters
    ----------
    n : int
        Total number of samples
    workers : int, optional
        Pool size (default: number of CPUs)
    seed : int or SeedSequence, optional
        Root seed; the same seed and worker count give the same estimate
    executor_cls : type
        ``concurrent.futures`` executor class used for the pool
    executor : Executor, optional
        Already running pool to submit to; it is left open for the caller
        and ``executor_cls`` is ignored

    Returns
    -------
    float
        Estimate of π

    Example
    -------
    >>> estimate_pi_parallel(10_000_000, workers=4, seed=7)  # doctest: +SKIP
    3.1415...
    """
    _check_samples(n)
    workers = DEFAULT_WORKERS if workers is None else workers
    chunks = partition_samples(n, workers)

    root = _root_seed(seed)
    tasks = list(zip(chunks, root.spawn(len(chunks))))

    logger.debug("Dispatching %d samples to %d workers", n, len(chunks))
    if executor is not None:
        inside = sum(executor.map(_count_inside_worker, tasks))
    else:
        with executor_cls(max_workers=len(chunks)) as pool:
            inside = sum(pool.map(_count_inside_worker, tasks))

    return 4.0 * inside / n


# ============================================================
# CONVERGENCE AND TIMING
# ============================================================

def convergence_table(
    sample_sizes: Sequence[int] = (10**2, 10**3, 10**4, 10**5, 10**6),
    seed: SeedLike = None
) -> pd.DataFrame:
    """
    Serial estimates for increasing sample sizes.

    Returns
    -------
    pd.DataFrame
        Columns 'n', 'estimate', 'abs_error', 'stderr'
    """
    root = _root_seed(seed)
    rows = []
    for n, child in zip(sample_sizes, root.spawn(len(sample_sizes))):
        result = estimate_pi_with_error(n, seed=child)
        rows.append({
            'n': n,
            'estimate': result['estimate'],
            'abs_error': abs(result['estimate'] - np.pi),
            'stderr': result['stderr'],
        })
    return pd.DataFrame(rows, columns=['n', 'estimate', 'abs_error', 'stderr'])


def compare_timings(
    n: int = DEFAULT_SAMPLES,
    workers: Optional[int] = None,
    seed: SeedLike = None,
    repeats: int = 1,
    executor_cls: Type[Executor] = ProcessPoolExecutor
) -> pd.DataFrame:
    """
    Wall-clock comparison of the serial and parallel estimators.

    One pool is started up front and shared by a small warm-up run and every
    timed parallel run, so worker start-up is not part of the measurement.
    The numbers depend on the host machine and are only meant for illustration.

    Returns
    -------
    pd.DataFrame
        Columns 'method', 'seconds', 'estimate' (best of ``repeats``)
    """
    _check_samples(n)
    if repeats <= 0:
        raise ValueError(f"Repeats must be positive, got {repeats}")
    workers = DEFAULT_WORKERS if workers is None else workers

    rows = []
    with executor_cls(max_workers=workers) as pool:
        estimate_pi(min(n, 1000), seed=seed)
        estimate_pi_parallel(min(n, 1000), workers=workers, seed=seed, executor=pool)

        methods = {
            'serial': lambda: estimate_pi(n, seed=seed),
            f'parallel ({workers} workers)': lambda: estimate_pi_parallel(
                n, workers=workers, seed=seed, executor=pool
            ),
        }

        for name, run in methods.items():
            best = np.inf
            estimate = np.nan
            for _ in range(repeats):
                start = time.perf_counter()
                estimate = run()
                best = min(best, time.perf_counter() - start)
            logger.info("%s: %.3f s (pi ~ %.6f)", name, best, estimate)
            rows.append({'method': name, 'seconds': best, 'estimate': estimate})

    return pd.DataFrame(rows, columns=['method', 'seconds', 'estimate'])
