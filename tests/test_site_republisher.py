import unittest

from webflow_reset.exceptions import RemoteOperationError
from webflow_reset.models import PublishResponse, Site
from webflow_reset.services.api_quota import RequestPacer
from webflow_reset.services.site_republisher import SiteRepublisher, staging_domains

from fakes import FakeClock, FakeWebflowClient

SITE_A = Site(id="a" * 24, short_name="site-a", name="Site A")
SITE_B = Site(id="b" * 24, short_name="site-b", name="Site B")


class TestSiteRepublisher(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.pacer = RequestPacer(min_interval=1.0, clock=self.clock, sleep=self.clock.sleep)
        self.client = FakeWebflowClient()
        self.republisher = SiteRepublisher(self.client, self.pacer, publish_interval=60.0)

    def test_staging_domain(self):
        self.assertEqual(staging_domains(SITE_A), ["site-a.webflow.io"])

    async def test_publishes_each_site_to_staging_domain(self):
        await self.republisher.republish([SITE_A, SITE_B])

        self.assertEqual(
            self.client.calls,
            [
                ("publish", SITE_A.id, ["site-a.webflow.io"]),
                ("publish", SITE_B.id, ["site-b.webflow.io"]),
            ]
        )
        self.assertEqual(self.republisher.stats.sites_republished, 2)

    async def test_waits_publish_interval_before_every_publish(self):
        await self.republisher.republish([SITE_A, SITE_B])

        self.assertEqual(self.clock.sleeps, [60.0, 60.0])

    async def test_next_regular_call_is_still_paced(self):
        await self.republisher.republish([SITE_A])
        await self.pacer.consume_quota()

        self.assertEqual(self.clock.sleeps, [60.0, 1.0])

    async def test_unqueued_publish_is_fatal(self):
        self.client.publish_response = PublishResponse(queued=False)

        with self.assertRaises(RemoteOperationError):
            await self.republisher.republish([SITE_A, SITE_B])

        self.assertEqual(len(self.client.calls), 1)

    async def test_no_sites_is_a_no_op(self):
        await self.republisher.republish([])

        self.assertEqual(self.client.calls, [])
        self.assertEqual(self.clock.sleeps, [])

    async def test_can_run_twice(self):
        await self.republisher.republish([SITE_A])
        await self.republisher.republish([SITE_A])

        self.assertEqual(len(self.client.calls), 2)


if __name__ == '__main__':
    unittest.main()
