import unittest
from unittest.mock import AsyncMock, patch

from webflow_reset import main as cli
from webflow_reset.exceptions import RemoteOperationError, ValidationError

COLLECTION_ID = "5f0c8c9e1c9d440000e8d8c8"


class TestCommandLine(unittest.TestCase):

    def test_parser_accepts_camel_case_aliases(self):
        args = cli.build_parser().parse_args([
            "empty-webflow", "--apiKey", "key", "--siteIds", "all", "--collectionIds", COLLECTION_ID, "all"
        ])

        self.assertEqual(args.api_key, "key")
        self.assertEqual(args.site_ids, ["all"])
        self.assertEqual(args.collection_ids, [COLLECTION_ID, "all"])
        self.assertFalse(args.remove_webhooks)

    def test_empty_webflow_requires_ids(self):
        with self.assertRaises(SystemExit):
            cli.build_parser().parse_args(["empty-webflow", "--api-key", "key", "--site-ids", "all"])

    def test_log_level_is_case_insensitive(self):
        args = cli.build_parser().parse_args(["--log-level", "debug", "list-sites", "--api-key", "key"])

        self.assertEqual(args.log_level, "DEBUG")

    @patch('webflow_reset.main.list_sites', new_callable=AsyncMock)
    def test_unknown_log_level_is_a_usage_error(self, mock_list):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--log-level", "bogus", "list-sites", "--api-key", "key"])

        self.assertEqual(ctx.exception.code, 2)
        mock_list.assert_not_awaited()

    @patch('webflow_reset.main.empty_webflow', new_callable=AsyncMock)
    def test_empty_webflow_command(self, mock_empty):
        code = cli.main([
            "empty-webflow", "--api-key", "key", "--site-ids", "all",
            "--collection-ids", COLLECTION_ID, "--remove-webhooks"
        ])

        self.assertEqual(code, 0)
        mock_empty.assert_awaited_once_with("key", ["all"], [COLLECTION_ID], remove_webhooks=True)

    @patch('webflow_reset.main.list_sites', new_callable=AsyncMock)
    def test_list_sites_command(self, mock_list):
        code = cli.main(["list-sites", "--api-key", "key"])

        self.assertEqual(code, 0)
        mock_list.assert_awaited_once_with("key")

    @patch('webflow_reset.main.check_rate_limit', new_callable=AsyncMock)
    def test_check_rate_limit_command(self, mock_check):
        code = cli.main(["check-rate-limit", "--apiKey", "key", "--collection-id", COLLECTION_ID])

        self.assertEqual(code, 0)
        mock_check.assert_awaited_once_with("key", COLLECTION_ID)

    def test_check_rate_limit_rejects_bad_collection_id(self):
        with patch('webflow_reset.main._make_client') as mock_make_client:
            code = cli.main(["check-rate-limit", "--api-key", "key", "--collection-id", "short"])

        self.assertEqual(code, 1)
        mock_make_client.assert_not_called()

    @patch('webflow_reset.main.empty_webflow', new_callable=AsyncMock)
    def test_validation_error_exits_non_zero(self, mock_empty):
        mock_empty.side_effect = ValidationError("bad collection id")

        code = cli.main(["empty-webflow", "--api-key", "key", "--site-ids", "all", "--collection-ids", "x"])

        self.assertEqual(code, 1)

    @patch('webflow_reset.main.list_sites', new_callable=AsyncMock)
    def test_remote_error_exits_non_zero(self, mock_list):
        mock_list.side_effect = RemoteOperationError("HTTP 401", status_code=401)

        self.assertEqual(cli.main(["list-sites", "--api-key", "key"]), 1)

    @patch('webflow_reset.main.list_sites', new_callable=AsyncMock)
    def test_missing_api_key_exits_non_zero(self, mock_list):
        code = cli.main(["list-sites", "--api-key", ""])

        self.assertEqual(code, 1)
        mock_list.assert_not_awaited()


if __name__ == '__main__':
    unittest.main()
