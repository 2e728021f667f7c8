import asyncio

import numpy as np
import pytest

from linkograph.errors import BackendUnavailable
from linkograph.similarity.lexical import jaccard
from linkograph.similarity.readiness import first_of
from linkograph.similarity.status import ModelStatus, ModelStatusFeed
from linkograph.similarity.strategy import (
    LexicalStrategy,
    SemanticStrategy,
    StrategyResolver,
    StrategyState,
)

from conftest import DummyEncoder, FailingEncoder, FlakyEncoder, HangingEncoder


class SlowReadyEncoder(DummyEncoder):
    async def prepare(self) -> None:
        self.prepared += 1
        await asyncio.sleep(0.2)


def _resolver(encoder, timeout_s=0.05):
    events = []
    feed = ModelStatusFeed()
    feed.subscribe(events.append)
    resolver = StrategyResolver(encoder, readiness_timeout_s=timeout_s, status=feed)
    return resolver, events


# ---------------------------------------------------------------------
# Race combinator
# ---------------------------------------------------------------------


def test_first_of_ready():
    async def _quick():
        return "ok"

    outcome = asyncio.run(first_of(_quick(), 1.0))
    assert outcome.kind == "ready"
    assert outcome.ready
    assert outcome.error is None


def test_first_of_failed():
    async def _boom():
        raise RuntimeError("nope")

    outcome = asyncio.run(first_of(_boom(), 1.0))
    assert outcome.kind == "failed"
    assert isinstance(outcome.error, RuntimeError)


def test_first_of_timeout_cancels_the_loser():
    state = {"cancelled": False}

    async def _never():
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            state["cancelled"] = True
            raise

    async def _run():
        outcome = await first_of(_never(), 0.02)
        await asyncio.sleep(0)
        return outcome

    outcome = asyncio.run(_run())
    assert outcome.kind == "timed_out"
    assert not outcome.ready
    assert state["cancelled"] is True


# ---------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------


def test_ready_backend_resolves_semantic():
    encoder = DummyEncoder()
    resolver, events = _resolver(encoder)

    strategy = asyncio.run(resolver.resolve())

    assert isinstance(strategy, SemanticStrategy)
    assert resolver.state is StrategyState.SEMANTIC
    assert resolver.outcome.kind == "ready"
    assert events == [ModelStatus.ACTIVE]


def test_hanging_backend_falls_back_to_lexical_after_timeout():
    resolver, events = _resolver(HangingEncoder(), timeout_s=0.05)

    async def _run():
        strategy = await resolver.resolve()
        return strategy, await strategy.score("a b c", "a b d")

    strategy, score = asyncio.run(_run())

    assert isinstance(strategy, LexicalStrategy)
    assert resolver.state is StrategyState.LEXICAL
    assert resolver.outcome.kind == "timed_out"
    assert events == [ModelStatus.FALLBACK]
    assert score == jaccard("a b c", "a b d")


def test_failing_backend_falls_back_to_lexical():
    resolver, events = _resolver(FailingEncoder())
    asyncio.run(resolver.resolve())

    assert resolver.state is StrategyState.LEXICAL
    assert resolver.outcome.kind == "failed"
    assert events == [ModelStatus.FALLBACK]


def test_missing_backend_is_lexical_without_probe():
    resolver, events = _resolver(None)
    asyncio.run(resolver.resolve())

    assert resolver.state is StrategyState.LEXICAL
    assert events == [ModelStatus.FALLBACK]


def test_late_readiness_is_discarded():
    encoder = SlowReadyEncoder()
    resolver, events = _resolver(encoder, timeout_s=0.02)

    async def _run():
        await resolver.resolve()
        await asyncio.sleep(0.3)
        return await resolver.resolve()

    strategy = asyncio.run(_run())

    assert isinstance(strategy, LexicalStrategy)
    assert events == [ModelStatus.FALLBACK]
    assert encoder.prepared == 1


def test_probe_runs_once_for_concurrent_callers():
    encoder = DummyEncoder()
    resolver, _ = _resolver(encoder)

    async def _run():
        return await asyncio.gather(resolver.resolve(), resolver.resolve(), resolver.resolve())

    strategies = asyncio.run(_run())

    assert encoder.prepared == 1
    assert strategies[0] is strategies[1] is strategies[2]


def test_degrade_is_one_way():
    resolver, events = _resolver(DummyEncoder())

    async def _run():
        await resolver.resolve()
        resolver.degrade(RuntimeError("gone"))
        resolver.degrade(RuntimeError("still gone"))
        return await resolver.resolve()

    strategy = asyncio.run(_run())

    assert isinstance(strategy, LexicalStrategy)
    assert events == [ModelStatus.ACTIVE, ModelStatus.FALLBACK]


# ---------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------


def test_semantic_represent_keeps_order_and_extracts_duplicates_once():
    encoder = DummyEncoder()
    strategy = SemanticStrategy(encoder)

    vectors = asyncio.run(strategy.represent(["abc", "xyz", "abc"]))

    assert len(vectors) == 3
    assert np.array_equal(vectors[0], vectors[2])
    assert not np.array_equal(vectors[0], vectors[1])
    assert sorted(encoder.extracted) == ["abc", "xyz"]


def test_semantic_compare_is_clamped_to_unit_interval():
    strategy = SemanticStrategy(DummyEncoder())
    a = np.array([1.0, 0.0], dtype=np.float32)

    assert strategy.compare(a, -a) == 0.0
    assert strategy.compare(a, a) == pytest.approx(1.0)
    assert 0.0 <= strategy.compare(a, a) <= 1.0


def test_semantic_identical_texts_score_near_one():
    strategy = SemanticStrategy(DummyEncoder())
    score = asyncio.run(strategy.score("Play game match 1", "Play game match 1"))
    assert score == pytest.approx(1.0)


def test_semantic_extraction_failure_is_backend_unavailable():
    strategy = SemanticStrategy(FlakyEncoder())
    with pytest.raises(BackendUnavailable):
        asyncio.run(strategy.represent(["a", "b"]))


# ---------------------------------------------------------------------
# Status feed
# ---------------------------------------------------------------------


def test_status_feed_notifies_on_change_only():
    feed = ModelStatusFeed()
    seen = []
    unsubscribe = feed.subscribe(seen.append)

    feed.publish(ModelStatus.LOADING)
    feed.publish(ModelStatus.ACTIVE)
    feed.publish(ModelStatus.ACTIVE)
    unsubscribe()
    feed.publish(ModelStatus.FALLBACK)

    assert seen == [ModelStatus.ACTIVE]
    assert feed.current is ModelStatus.FALLBACK


def test_status_feed_survives_broken_listener():
    feed = ModelStatusFeed()
    seen = []

    def _broken(_status):
        raise RuntimeError("listener bug")

    feed.subscribe(_broken)
    feed.subscribe(seen.append)
    feed.publish(ModelStatus.FALLBACK)

    assert seen == [ModelStatus.FALLBACK]
