"""streamsampler — reservoir sampling over streams of unknown length.

Public API
----------
The entire usable surface is importable directly from ``streamsampler``::

    from streamsampler import UniformReservoir, WeightedReservoir, SingleWeightedSampler
    from streamsampler import SamplerConfig, build_sampler
    from streamsampler.evaluation import selection_frequencies, goodness_of_fit
"""

from __future__ import annotations

# Core interfaces
from streamsampler.base import SlotReservoir, StreamSampler

# Configuration
from streamsampler.config import SamplerConfig, build_sampler

# Random sources
from streamsampler.random_source import NumpyRandomSource, RandomSource, as_random_source

# Single-element weighted sampler
from streamsampler.single import SingleWeightedSampler

# Element stores
from streamsampler.store import ArenaSlotStore, ListSlotStore, SlotStore

# Reservoirs
from streamsampler.uniform import UniformReservoir
from streamsampler.weighted import WeightedReservoir

__version__ = "0.1.0"

__all__ = [
    # Primary abstractions
    "StreamSampler",
    "SlotReservoir",
    "UniformReservoir",
    "WeightedReservoir",
    "SingleWeightedSampler",
    # Configuration
    "SamplerConfig",
    "build_sampler",
    # Random sources
    "RandomSource",
    "NumpyRandomSource",
    "as_random_source",
    # Element stores
    "SlotStore",
    "ListSlotStore",
    "ArenaSlotStore",
    "__version__",
]
