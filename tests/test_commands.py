from unittest.mock import patch

import maintenance
from exceptions import StoreUnavailable
from tests.base import AppTestCase


class DedupeCommandTests(AppTestCase):
    def setUp(self):
        super().setUp()
        self.runner = self.app.test_cli_runner()
        self.add_candidate("c1", email="Jane.Doe@X.com", first_name="Jane", last_name="Doe")
        self.add_candidate("c2", first_name="Jane", last_name="Doe")
        self.add_prospect("p1", email="jane.doe@x.com")

    def test_check_reports_without_converting(self):
        result = self.runner.invoke(args=['dedupe', 'check'])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("Email duplicates: 1", result.output)
        self.assertFalse(self.prospect("p1").is_converted)

    def test_run_converts(self):
        result = self.runner.invoke(args=['dedupe', 'run'])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("Prospects converted: 1", result.output)
        self.assertTrue(self.prospect("p1").is_converted)

    def test_names(self):
        result = self.runner.invoke(args=['dedupe', 'names', '--sample', '1'])

        self.assertEqual(result.exit_code, 0)
        self.assertIn('[DUP] "jane doe" x 2', result.output)


class MaintenanceScriptTests(AppTestCase):
    def test_exit_zero_on_completion(self):
        self.add_candidate("c1", email="a@x.com")
        self.add_prospect("p1", email="a@x.com")

        self.assertEqual(maintenance.main(self.app), 0)
        self.assertTrue(self.prospect("p1").is_converted)

    def test_exit_non_zero_when_store_unreachable(self):
        with patch('maintenance.run_batch', side_effect=StoreUnavailable("down")):
            self.assertEqual(maintenance.main(self.app), 1)

    def test_fatal_error_logged_with_traceback(self):
        with patch('maintenance.run_batch', side_effect=StoreUnavailable("down")):
            with self.assertLogs('maintenance', level='ERROR') as logs:
                maintenance.main(self.app)
        self.assertIsNotNone(logs.records[0].exc_info)
        self.assertIn("Traceback", logs.output[0])
