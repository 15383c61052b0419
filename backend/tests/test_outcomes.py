"""Tests for settle_all."""

import asyncio

from busmap.core.outcomes import settle_all


async def _ok(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


async def _fail(message):
    raise RuntimeError(message)


def test_failures_do_not_cancel_siblings():
    """A failing awaitable leaves the others to finish."""
    outcomes = asyncio.run(settle_all([_ok("slow", 0.01), _fail("boom"), _ok("fast")]))

    assert [o.ok for o in outcomes] == [True, False, True]
    assert outcomes[0].value == "slow"
    assert str(outcomes[1].error) == "boom"
    assert outcomes[2].value == "fast"


def test_empty_input():
    """Nothing to settle gives no outcomes."""
    assert asyncio.run(settle_all([])) == []
