"""Sampler configuration objects."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from omegaconf import DictConfig, OmegaConf

from streamsampler.base import StreamSampler
from streamsampler.single import SingleWeightedSampler
from streamsampler.uniform import UniformReservoir
from streamsampler.utils import resolve_float_dtype
from streamsampler.weighted import WeightedReservoir

SAMPLER_KINDS: tuple[str, ...] = ("uniform", "weighted", "single")


@dataclass
class SamplerConfig:
    """Construction-time configuration for one sampler.

    Attributes:
        kind: ``uniform`` (Algorithm L), ``weighted`` (A-ExpJ) or ``single``
            (exact one-element weighted sampler).
        capacity: Target sample size; must be 1 for ``single``.
        seed: Seed for the numpy generator, ``None`` for OS entropy.
        float_dtype: Floating-point dtype for probability math.
        preallocate: Allocate all slots at construction.
    """

    kind: str = "uniform"
    capacity: int = 1
    seed: int | None = None
    float_dtype: str = "float64"
    preallocate: bool = False

    def __post_init__(self) -> None:
        if self.kind not in SAMPLER_KINDS:
            raise ValueError(f"Unknown sampler kind '{self.kind}', expected one of {SAMPLER_KINDS}")
        if self.capacity < 1:
            raise ValueError(f"capacity must be positive, got {self.capacity}")
        if self.kind == "single" and self.capacity != 1:
            raise ValueError("the single weighted sampler always has capacity 1")
        resolve_float_dtype(self.float_dtype)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | DictConfig) -> SamplerConfig:
        """Build a config from a plain mapping or a Hydra/OmegaConf node."""
        if isinstance(mapping, DictConfig):
            mapping = OmegaConf.to_container(mapping, resolve=True)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise KeyError(f"Unknown sampler config keys: {unknown}")
        return cls(**dict(mapping))


def build_sampler(config: SamplerConfig, random_source: Any = None) -> StreamSampler[Any]:
    """Instantiate the sampler described by ``config``.

    Args:
        config: Sampler configuration.
        random_source: Overrides ``config.seed`` when given.
    """
    source = config.seed if random_source is None else random_source
    if config.kind == "single":
        return SingleWeightedSampler(random_source=source)
    reservoir_cls = UniformReservoir if config.kind == "uniform" else WeightedReservoir
    return reservoir_cls(
        config.capacity,
        random_source=source,
        float_dtype=config.float_dtype,
        preallocate=config.preallocate,
    )
