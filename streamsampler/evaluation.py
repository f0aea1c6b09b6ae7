"""Empirical checks of sampler selection probabilities.

Runs a sampler factory over the same stream many times, tabulates how often
each element ends up in the sample and compares the counts with the
theoretical inclusion probabilities.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
import pandas as pd
from scipy.stats import chisquare

from streamsampler.base import StreamSampler
from streamsampler.config import SamplerConfig, build_sampler

logger = logging.getLogger(__name__)


@dataclass
class GoodnessOfFit:
    """Chi-square comparison of observed and expected selection counts.

    Attributes:
        statistic: Chi-square statistic.
        p_value: Probability of a statistic at least this large under the
            expected distribution.
        dof: Degrees of freedom.
    """

    statistic: float
    p_value: float
    dof: int


def expected_uniform(n_elements: int, capacity: int) -> np.ndarray:
    """Inclusion probability of each of ``n_elements`` in a uniform sample."""
    if n_elements < 1:
        raise ValueError("n_elements must be positive")
    return np.full(n_elements, min(1.0, capacity / n_elements), dtype=np.float64)


def expected_proportional(weights: Sequence[float]) -> np.ndarray:
    """Selection probability of each element when exactly one is drawn by weight.

    Non-positive weights are never selected.
    """
    w = np.clip(np.asarray(weights, dtype=np.float64), 0.0, None)
    total = w.sum()
    if total <= 0:
        raise ValueError("at least one weight must be positive")
    return w / total


def seeded_factory(config: SamplerConfig, n_trials: int) -> Callable[[], StreamSampler[Any]]:
    """Return a factory building samplers with independent child seeds.

    Child seeds are spawned from ``config.seed`` so a whole evaluation run is
    reproducible from one number.
    """
    children = iter(np.random.SeedSequence(config.seed).spawn(n_trials))

    def make_sampler() -> StreamSampler[Any]:
        return build_sampler(config, random_source=np.random.default_rng(next(children)))

    return make_sampler


def selection_frequencies(
    make_sampler: Callable[[], StreamSampler[Any]],
    elements: Sequence[Any],
    n_trials: int,
    weights: Sequence[float] | None = None,
    expected: np.ndarray | None = None,
) -> pd.DataFrame:
    """Tabulate how often each element is selected over independent trials.

    Args:
        make_sampler: Callable returning a fresh sampler for each trial.
        elements: Distinct, hashable stream elements, fed in order.
        n_trials: Number of independent trials.
        weights: Per-element weights for weighted samplers; ``None`` feeds
            the elements unweighted.
        expected: Optional per-element inclusion probabilities.

    Returns:
        ``pandas.DataFrame`` with columns ``element``, ``count`` and
        ``frequency`` (plus ``expected`` when given), one row per element.
    """
    if n_trials < 1:
        raise ValueError("n_trials must be positive")
    if weights is not None and len(weights) != len(elements):
        raise ValueError("weights length must match number of elements")

    position = {element: i for i, element in enumerate(elements)}
    if len(position) != len(elements):
        raise ValueError("elements must be distinct")

    counts = np.zeros(len(elements), dtype=np.int64)
    for _ in range(n_trials):
        sampler = make_sampler()
        if weights is None:
            sampler.observe_many(elements)
        else:
            sampler.observe_many(zip(weights, elements))
        result = sampler.consume_result()
        if not isinstance(result, list):
            result = [] if result is None else [result]
        for element in result:
            counts[position[element]] += 1

    logger.info(f"Tabulated {n_trials} trials over {len(elements)} elements")
    frame = pd.DataFrame(
        {
            "element": list(elements),
            "count": counts,
            "frequency": counts / float(n_trials),
        }
    )
    if expected is not None:
        expected = np.asarray(expected, dtype=np.float64)
        if expected.shape != (len(elements),):
            raise ValueError("expected must have one probability per element")
        frame["expected"] = expected
    return frame


def goodness_of_fit(frame: pd.DataFrame) -> GoodnessOfFit:
    """Chi-square test of a :func:`selection_frequencies` table.

    Rows with zero expected probability are left out; expected counts are
    rescaled so their total matches the observed total.
    """
    if "expected" not in frame.columns:
        raise KeyError("frame has no 'expected' column")
    mask = frame["expected"].to_numpy(dtype=np.float64) > 0
    observed = frame["count"].to_numpy(dtype=np.float64)[mask]
    expected = frame["expected"].to_numpy(dtype=np.float64)[mask]
    if observed.size < 2:
        raise ValueError("need at least two elements with positive expected probability")
    expected = expected / expected.sum() * observed.sum()
    statistic, p_value = chisquare(observed, expected)
    return GoodnessOfFit(statistic=float(statistic), p_value=float(p_value), dof=int(observed.size - 1))
