import asyncio
import time
import unittest

from webflow_reset.services.api_quota import RequestPacer

from fakes import FakeClock


class TestRequestPacer(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.pacer = RequestPacer(min_interval=1.0, clock=self.clock, sleep=self.clock.sleep)

    async def test_first_call_does_not_wait(self):
        await self.pacer.consume_quota()

        self.assertEqual(self.clock.sleeps, [])
        self.assertEqual(self.pacer.quota_window, 1001.0)

    async def test_back_to_back_calls_wait_for_the_interval(self):
        await self.pacer.consume_quota()
        await self.pacer.consume_quota()

        self.assertEqual(self.clock.sleeps, [1.0])
        self.assertEqual(self.clock.now, 1001.0)

    async def test_only_remaining_interval_is_waited(self):
        await self.pacer.consume_quota()
        self.clock.now += 0.75
        await self.pacer.consume_quota()

        self.assertEqual(len(self.clock.sleeps), 1)
        self.assertAlmostEqual(self.clock.sleeps[0], 0.25)

    async def test_no_wait_when_interval_already_elapsed(self):
        await self.pacer.consume_quota()
        self.clock.now += 5
        await self.pacer.consume_quota()

        self.assertEqual(self.clock.sleeps, [])

    async def test_custom_delay_overrides_pacing(self):
        await self.pacer.consume_quota()
        await self.pacer.consume_quota(custom_delay=60.0)

        self.assertEqual(self.clock.sleeps, [60.0])

    async def test_custom_delay_still_advances_window(self):
        await self.pacer.consume_quota(custom_delay=60.0)
        await self.pacer.consume_quota()

        self.assertEqual(self.clock.sleeps, [60.0, 1.0])

    async def test_zero_custom_delay_skips_wait_but_advances_window(self):
        await self.pacer.consume_quota()
        await self.pacer.consume_quota(custom_delay=0)

        self.assertEqual(self.clock.sleeps, [])
        self.assertEqual(self.pacer.quota_window, self.clock.now + 1.0)

    async def test_quota_window_never_decreases(self):
        windows = []
        for delay in (None, 5.0, None, 0, None, 2.0):
            await self.pacer.consume_quota(custom_delay=delay)
            windows.append(self.pacer.quota_window)

        self.assertEqual(windows, sorted(windows))

    async def test_release_times_are_spaced_by_interval(self):
        released = []
        for _ in range(5):
            await self.pacer.consume_quota()
            released.append(self.clock.now)

        gaps = [b - a for a, b in zip(released, released[1:])]
        self.assertTrue(all(gap >= 1.0 for gap in gaps), gaps)


class TestRequestPacerRealTime(unittest.IsolatedAsyncioTestCase):

    async def test_consecutive_calls_are_separated_in_real_time(self):
        pacer = RequestPacer(min_interval=0.05)

        await pacer.consume_quota()
        first = time.monotonic()
        await pacer.consume_quota()
        second = time.monotonic()

        # event loop may wake up to one clock tick early
        self.assertGreaterEqual(second - first, 0.05 - 0.01)

    async def test_default_sleep_is_asyncio_sleep(self):
        pacer = RequestPacer()
        self.assertIs(pacer._sleep, asyncio.sleep)


if __name__ == '__main__':
    unittest.main()
