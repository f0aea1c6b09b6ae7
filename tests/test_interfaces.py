"""Interface-level tests for core streamsampler abstractions."""

from __future__ import annotations

import pytest

import streamsampler
from streamsampler.base import StreamSampler
from streamsampler.single import SingleWeightedSampler
from streamsampler.uniform import UniformReservoir
from streamsampler.weighted import WeightedReservoir


@pytest.mark.parametrize(
    "sampler",
    [UniformReservoir(2, random_source=1), WeightedReservoir(2, random_source=1), SingleWeightedSampler(1)],
)
def test_samplers_implement_stream_sampler(sampler) -> None:
    assert isinstance(sampler, StreamSampler)
    assert sampler.capacity in (1, 2)


def test_public_api_exports() -> None:
    for name in streamsampler.__all__:
        assert hasattr(streamsampler, name)
