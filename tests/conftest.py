"""Shared fixtures for sampler tests."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

import pytest

from streamsampler.random_source import RandomSource


class _ScriptedSource(RandomSource):
    """Random source replaying fixed draws, so exact outcomes can be asserted."""

    def __init__(self, uniforms: Iterable[float] = (), integers: Iterable[int] = ()) -> None:
        self.uniforms = deque(uniforms)
        self.integers = deque(integers)

    def uniform(self) -> float:
        if not self.uniforms:
            raise AssertionError("no scripted uniform draws left")
        return self.uniforms.popleft()

    def integer(self, high: int) -> int:
        if not self.integers:
            raise AssertionError("no scripted integer draws left")
        value = self.integers.popleft()
        assert 0 <= value < high
        return value


@pytest.fixture
def scripted() -> type[_ScriptedSource]:
    """Factory for scripted random sources."""
    return _ScriptedSource
