import unittest

from django.test import override_settings

from apps.checkout.checks import single_worker_check


class SingleWorkerCheckTests(unittest.TestCase):
    @override_settings(CHECKOUT_WORKER_PROCESSES=1)
    def test_single_worker_passes(self):
        self.assertEqual(single_worker_check(None), [])

    @override_settings(CHECKOUT_WORKER_PROCESSES=4)
    def test_several_workers_warn(self):
        messages = single_worker_check(None)
        self.assertEqual([m.id for m in messages], ["checkout.W001"])
        self.assertIn("4 worker processes", messages[0].msg)
