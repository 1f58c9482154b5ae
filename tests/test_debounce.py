'''
Debouncer timing, teardown and identity.

'''
import pytest
import trio
from trio.testing import wait_all_tasks_blocked

from tickerpal import (
    Debouncer,
    DebounceCache,
)


def test_burst_fires_once_after_last_trigger(run_mocked):

    async def main():
        fired: list[float] = []

        async with trio.open_nursery() as n:
            deb = Debouncer(
                lambda: fired.append(trio.current_time()),
                0.3,
                n,
            )
            for _ in range(5):
                deb.trigger()
                await trio.sleep(0.1)

            # last trigger was 0.1 ago
            last: float = trio.current_time() - 0.1
            assert not fired
            assert deb.pending

            await trio.sleep(1)

        assert fired == [pytest.approx(last + 0.3)]
        assert not deb.pending

    run_mocked(main)


def test_spaced_triggers_each_fire(run_mocked):

    async def main():
        fired: list[float] = []

        t0: float = trio.current_time()
        async with trio.open_nursery() as n:
            deb = Debouncer(
                lambda: fired.append(trio.current_time()),
                0.3,
                n,
            )
            deb.trigger()
            await trio.sleep(0.5)
            deb.trigger()
            await trio.sleep(0.5)

        assert fired == [pytest.approx(t0 + 0.3), pytest.approx(t0 + 0.8)]

    run_mocked(main)


@pytest.mark.parametrize('delay', [0, -1])
def test_non_positive_delay_is_async(run_mocked, delay):

    async def main():
        fired: list[int] = []

        async with trio.open_nursery() as n:
            deb = Debouncer(lambda: fired.append(1), delay, n)

            deb.trigger()
            deb.trigger()
            deb.trigger()

            # never inside the trigger call itself
            assert fired == []

            await wait_all_tasks_blocked()
            assert fired == [1]

            deb.trigger()
            await wait_all_tasks_blocked()
            assert fired == [1, 1]

    run_mocked(main)


def test_teardown_before_delay_never_fires(run_mocked):

    async def main():
        fired: list[int] = []

        async with trio.open_nursery() as n:
            deb = Debouncer(lambda: fired.append(1), 0.3, n)
            deb.trigger()
            await trio.sleep(0.2)
            deb.teardown()

            await trio.sleep(5)

        assert fired == []
        assert deb.closed

        # idempotent
        deb.teardown()

        with pytest.raises(trio.ClosedResourceError):
            deb.trigger()

    run_mocked(main)


def test_cancel_allows_later_trigger(run_mocked):

    async def main():
        fired: list[float] = []

        t0: float = trio.current_time()
        async with trio.open_nursery() as n:
            deb = Debouncer(
                lambda: fired.append(trio.current_time()),
                0.3,
                n,
            )
            deb.trigger()
            deb.cancel()
            assert not deb.pending

            await trio.sleep(1)
            assert fired == []

            deb.trigger()

        assert fired == [pytest.approx(t0 + 1.3)]

    run_mocked(main)


def test_async_action_is_awaited(run_mocked):

    async def main():
        done: list[float] = []

        async def action():
            await trio.sleep(1)
            done.append(trio.current_time())

        t0: float = trio.current_time()
        async with trio.open_nursery() as n:
            deb = Debouncer(action, 0.3, n)
            deb.trigger()

        assert done == [pytest.approx(t0 + 1.3)]

    run_mocked(main)


def test_fired_action_survives_new_trigger(run_mocked):
    '''
    Only *pending* invocations are dropped, an already running action
    runs to completion.

    '''
    async def main():
        done: list[int] = []
        calls: list[int] = []

        async def action():
            calls.append(1)
            await trio.sleep(1)
            done.append(1)

        async with trio.open_nursery() as n:
            deb = Debouncer(action, 0.3, n)
            deb.trigger()
            await trio.sleep(0.5)  # fired, now "running"
            deb.trigger()
            deb.teardown()

        assert calls == [1]
        assert done == [1]

    run_mocked(main)


def test_cache_identity(run_mocked):

    async def main():
        fired: list[str] = []

        def a():
            fired.append('a')

        def b():
            fired.append('b')

        async with trio.open_nursery() as n:
            cache = DebounceCache(n)

            first = cache.get(a, 0.3)
            assert cache.get(a, 0.3) is first

            # pending timer from the old config must never fire
            first.trigger()
            second = cache.get(b, 0.3)
            assert second is not first
            assert first.closed
            assert not second.pending

            third = cache.get(b, 0.5)
            assert third is not second
            assert second.closed
            assert cache.current is third

            third.trigger()
            await trio.sleep(1)

            cache.teardown()
            assert cache.closed
            assert third.closed
            with pytest.raises(trio.ClosedResourceError):
                cache.get(b, 0.5)

            # idempotent
            cache.teardown()

        assert fired == ['b']

    run_mocked(main)
