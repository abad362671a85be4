import asyncio

import pytest

from chatfeed.signaler import IntervalSignaler


def test_interval_subscription_fires_until_closed():
    async def run():
        subscription = await IntervalSignaler(0.01).subscribe("chat~a~1")
        first = await subscription.wait()
        second = await subscription.wait()
        await subscription.close()
        return first, second, await subscription.wait(), subscription.closed

    assert asyncio.run(run()) == (True, True, False, True)


def test_close_wakes_pending_wait():
    async def run():
        subscription = await IntervalSignaler(60).subscribe("chat~a~1")
        waiter = asyncio.ensure_future(subscription.wait())
        await asyncio.sleep(0)
        await subscription.close()
        return await asyncio.wait_for(waiter, timeout=1)

    assert asyncio.run(run()) is False


def test_resubscribe_tracks_latest_topic():
    async def run():
        subscription = await IntervalSignaler(1).subscribe("chat~a~1")
        await subscription.resubscribe("chat~a~2")
        await subscription.resubscribe("chat~a~3")
        return subscription.topic

    assert asyncio.run(run()) == "chat~a~3"


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        IntervalSignaler(0)
