"""Selection-frequency check: empirical vs. theoretical inclusion probabilities."""

from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

import hydra
import numpy as np
import pandas as pd
from dotenv import load_dotenv
from omegaconf import DictConfig

from streamsampler.config import SamplerConfig
from streamsampler.evaluation import (
    expected_proportional,
    expected_uniform,
    goodness_of_fit,
    seeded_factory,
    selection_frequencies,
)

logger = logging.getLogger(__name__)


def _expected(config: SamplerConfig, n_elements: int, weights: list[float] | None) -> np.ndarray | None:
    """Theoretical inclusion probabilities, when they have a closed form."""
    if weights is None:
        return expected_uniform(n_elements, config.capacity)
    if config.capacity == 1:
        return expected_proportional(weights)
    # A-ExpJ inclusion probabilities for k > 1 have no simple closed form.
    return None


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """Run the selection-frequency check and write CSV summaries."""
    load_dotenv()
    sampler_cfg = SamplerConfig.from_mapping(cfg.sampler)
    n_elements = int(cfg.experiment.n_elements)
    n_trials = int(cfg.experiment.n_trials)

    weights = cfg.experiment.get("weights")
    if weights is not None:
        weights = [float(w) for w in weights]
        if len(weights) != n_elements:
            raise ValueError("experiment.weights must have n_elements entries")
    if sampler_cfg.kind == "uniform" and weights is not None:
        raise ValueError("uniform sampler does not take weights")
    if sampler_cfg.kind != "uniform" and weights is None:
        weights = [1.0] * n_elements

    logger.info(
        f"Running {n_trials} trials of {sampler_cfg.kind} sampler "
        f"(capacity {sampler_cfg.capacity}) over {n_elements} elements"
    )
    elements = list(range(n_elements))
    expected = _expected(sampler_cfg, n_elements, weights)
    frame = selection_frequencies(
        seeded_factory(sampler_cfg, n_trials),
        elements,
        n_trials,
        weights=weights,
        expected=expected,
    )

    out_dir = Path(str(cfg.experiment.output_dir)) / str(cfg.experiment.name)
    out_dir.mkdir(parents=True, exist_ok=True)
    frame.to_csv(out_dir / "frequencies.csv", index=False)

    summary = {"kind": sampler_cfg.kind, "capacity": sampler_cfg.capacity, "n_trials": n_trials}
    if expected is not None:
        fit = goodness_of_fit(frame)
        summary.update(asdict(fit))
        logger.info(f"chi2={fit.statistic:.3f} dof={fit.dof} p={fit.p_value:.4f}")
    pd.DataFrame([summary]).to_csv(out_dir / "summary.csv", index=False)


if __name__ == "__main__":
    main()
