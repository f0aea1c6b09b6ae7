"""Tests for sampler configuration and construction."""

from __future__ import annotations

import pytest
from omegaconf import OmegaConf

from streamsampler.config import SamplerConfig, build_sampler
from streamsampler.single import SingleWeightedSampler
from streamsampler.uniform import UniformReservoir
from streamsampler.weighted import WeightedReservoir


@pytest.mark.parametrize(
    ("kind", "capacity", "expected_cls"),
    [
        ("uniform", 4, UniformReservoir),
        ("weighted", 4, WeightedReservoir),
        ("single", 1, SingleWeightedSampler),
    ],
)
def test_build_sampler_dispatches_on_kind(kind, capacity, expected_cls) -> None:
    """build_sampler returns the configured sampler class."""
    sampler = build_sampler(SamplerConfig(kind=kind, capacity=capacity, seed=1))
    assert isinstance(sampler, expected_cls)
    assert sampler.capacity == capacity


def test_sampler_config_from_dictconfig() -> None:
    """OmegaConf nodes are accepted."""
    node = OmegaConf.create({"kind": "weighted", "capacity": 3, "seed": 7, "preallocate": True})
    config = SamplerConfig.from_mapping(node)
    assert config == SamplerConfig(kind="weighted", capacity=3, seed=7, preallocate=True)


def test_sampler_config_rejects_unknown_keys() -> None:
    """Typos in config keys are reported."""
    with pytest.raises(KeyError):
        SamplerConfig.from_mapping({"kind": "uniform", "capasity": 3})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": "bogus"},
        {"kind": "uniform", "capacity": 0},
        {"kind": "single", "capacity": 2},
    ],
)
def test_sampler_config_validation(kwargs) -> None:
    """Invalid kinds and capacities are rejected at construction."""
    with pytest.raises(ValueError):
        SamplerConfig(**kwargs)


def test_sampler_config_rejects_integer_float_dtype() -> None:
    """Probability math must be floating point."""
    with pytest.raises(TypeError):
        SamplerConfig(float_dtype="int32")


def test_build_sampler_seed_is_reproducible() -> None:
    """Two samplers from one seeded config produce the same sample."""
    config = SamplerConfig(kind="uniform", capacity=5, seed=13)
    first = build_sampler(config)
    second = build_sampler(config)
    first.observe_many(range(1000))
    second.observe_many(range(1000))
    assert first.peek_result() == second.peek_result()
