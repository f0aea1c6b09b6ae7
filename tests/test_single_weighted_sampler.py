"""Tests for the single-element weighted sampler."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from streamsampler.single import SingleWeightedSampler


def test_single_sampler_first_positive_element_is_selected(scripted) -> None:
    """The first admissible element is selected without a draw."""
    sampler = SingleWeightedSampler(random_source=scripted())
    sampler.observe(0, "zero")
    sampler.observe(-2, "negative")
    sampler.observe(4, "first")
    assert sampler.peek_result() == "first"
    assert sampler.weight_sum == 4
    assert len(sampler) == 1


def test_single_sampler_scripted_real_draw(scripted) -> None:
    """Weights [10, 1]: a draw of 0.95 gives R = 10.45, so X is kept."""
    sampler = SingleWeightedSampler(random_source=scripted(uniforms=[0.95]))
    sampler.observe(10.0, "X")
    sampler.observe(1.0, "Y")
    assert sampler.peek_result() == "X"
    assert sampler.weight_sum == pytest.approx(11.0)


def test_single_sampler_scripted_integer_draw(scripted) -> None:
    """Integer weights draw an integer R in [0, sum); R < weight replaces."""
    sampler = SingleWeightedSampler(random_source=scripted(integers=[0, 5]))
    sampler.observe(10, "X")
    sampler.observe(1, "Y")
    assert sampler.peek_result() == "Y"
    sampler.observe(2, "Z")
    assert sampler.peek_result() == "Y"
    assert sampler.weight_sum == 13


def test_single_sampler_proportionality() -> None:
    """Selection frequency converges to w / (w1 + w2)."""
    trials = 4000
    wins = 0
    for seed in np.random.SeedSequence(3).spawn(trials):
        sampler = SingleWeightedSampler(random_source=np.random.default_rng(seed))
        sampler.observe(3, "heavy")
        sampler.observe(1, "light")
        wins += sampler.consume_result() == "heavy"
    assert abs(wins / trials - 0.75) < 0.04


def test_single_sampler_emplace_builds_selected_only(scripted) -> None:
    """The factory runs only for elements that become selected."""
    calls: list[str] = []

    def build(name: str) -> str:
        calls.append(name)
        return name

    sampler = SingleWeightedSampler(random_source=scripted(integers=[3]))
    sampler.emplace(2, build, "a")
    sampler.emplace(2, build, "b")
    assert calls == ["a"]
    assert sampler.peek_result() == "a"


def test_single_sampler_consume_and_reset() -> None:
    """consume_result returns the element once, then None."""
    sampler = SingleWeightedSampler(random_source=0)
    sampler.observe_many([(1, "a"), (2, "b")])
    held = sampler.peek_result()
    assert sampler.consume_result() == held
    assert sampler.consume_result() is None
    assert not sampler.has_result
    assert sampler.weight_sum == 0

    sampler.observe(1, "c")
    sampler.reset()
    assert sampler.peek_result() is None


def test_single_sampler_keeps_none_elements(scripted) -> None:
    """None is a valid element distinct from no selection."""
    sampler = SingleWeightedSampler(random_source=scripted())
    sampler.observe(1, None)
    assert sampler.has_result
    assert sampler.peek_result() is None


def test_single_sampler_clone_and_take() -> None:
    """Clones continue the same draws; take resets the source."""
    sampler = SingleWeightedSampler(random_source=6)
    sampler.observe_many((1, i) for i in range(10))
    duplicate = sampler.clone()
    sampler.observe_many((1, i) for i in range(10, 100))
    duplicate.observe_many((1, i) for i in range(10, 100))
    assert duplicate.peek_result() == sampler.peek_result()

    held = sampler.peek_result()
    moved = sampler.take()
    assert moved.peek_result() == held
    assert sampler.weight_sum == 0
    assert not sampler.has_result
    assert sampler.capacity == 1


def test_single_sampler_failed_factory_keeps_weight_sum(scripted) -> None:
    """A factory that raises does not count its weight."""
    sampler = SingleWeightedSampler(random_source=scripted(integers=[0]))
    sampler.observe(2, "a")

    def boom() -> str:
        raise ValueError("cannot build element")

    with pytest.raises(ValueError):
        sampler.emplace(3, boom)
    assert sampler.weight_sum == 2
    assert sampler.peek_result() == "a"


def test_single_sampler_reset_replay_matches_fresh() -> None:
    """After reset the sampler replays like a new one with the same generator state."""
    pairs = [(1 + i % 4, i) for i in range(200)]

    sampler = SingleWeightedSampler(random_source=8)
    sampler.observe_many(pairs)
    sampler.reset()
    assert sampler.peek_result() is None
    assert sampler.weight_sum == 0

    twin = SingleWeightedSampler(random_source=sampler.random_source.clone())
    sampler.observe_many(pairs)
    twin.observe_many(pairs)
    assert sampler.peek_result() == twin.peek_result()
    assert sampler.weight_sum == twin.weight_sum


def test_single_sampler_reset_is_logged(caplog) -> None:
    """reset logs at DEBUG."""
    sampler = SingleWeightedSampler(random_source=0)
    with caplog.at_level(logging.DEBUG, logger="streamsampler.single"):
        sampler.reset()
    assert "Reset SingleWeightedSampler" in caplog.text
