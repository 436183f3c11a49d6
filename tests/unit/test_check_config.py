"""Unit tests for notify/check_config.py"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

from notify.check_config import check_config, main


class TestCheckConfig(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "notify.json")
        config = {
            "email": {
                "smtp": "mail.openjdk.org",
                "sender": "Notifier <notifier@openjdk.org>",
                "archive": "https://mail.openjdk.org/pipermail",
            },
            "repositories": {
                "openjdk/jdk": {
                    "json": {"folder": self._tmp.name, "version": "21", "build": "b01"},
                    "mailinglists": [
                        {"recipient": "jdk-dev@openjdk.org", "domains": "openjdk\\.org"},
                        {"recipient": "broken", "domains": ".*"},
                    ],
                },
                "openjdk/empty": {},
            },
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(config, f)

    def tearDown(self):
        self._tmp.cleanup()

    @patch("notify.factory.log_notification_error", return_value="/tmp/report.txt")
    def test_stats(self, mock_log_error):
        output = io.StringIO()
        with redirect_stdout(output), self.assertLogs("notify.factory", level="WARNING"):
            stats = check_config(self.path)

        self.assertEqual(stats, {"configured": 1, "inert": 1, "failed": 1})
        self.assertIn("→ openjdk/jdk", output.getvalue())
        self.assertIn("✗ openjdk/jdk: mailinglist broken", output.getvalue())
        self.assertIn(
            "1 repositories notifying, 1 without consumers, 1 pipelines rejected",
            output.getvalue(),
        )

    def test_missing_config_exits_with_error(self):
        missing = os.path.join(self._tmp.name, "missing.json")
        with patch("sys.argv", ["notify-check-config", "--config", missing]):
            with self.assertRaises(SystemExit) as ctx:
                main()
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
