"""Unit tests for notify/json_updater.py"""

import json
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

from models.vcs import Branch, Tag
from notify.json_updater import JsonUpdater, parse_issue_ids
from tests.fixtures.commit_factory import create_test_commit
from tests.fixtures.fakes import FakeRepository


class TestParseIssueIds(unittest.TestCase):
    def test_numeric_and_project_issues(self):
        message = ["8000001: Fix one", "JDK-8000002: Fix two", "", "8000003: not a title"]
        self.assertEqual(parse_issue_ids(message), ["8000001", "JDK-8000002"])

    def test_plain_title_has_no_issues(self):
        self.assertEqual(parse_issue_ids(["Merge", "", "text"]), [])


class TestJsonUpdater(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.folder = Path(self._tmp.name) / "status"
        self.repository = FakeRepository()
        self.updater = JsonUpdater(self.folder, "21", "b07")

    def tearDown(self):
        self._tmp.cleanup()

    def _written(self):
        files = sorted(self.folder.glob("*.json"))
        return [json.loads(f.read_text(encoding="utf-8")) for f in files]

    def test_commits_written_as_one_file(self):
        commits = [
            create_test_commit("c1", message=["8000001: Fix"]),
            create_test_commit(
                "c2",
                message=["8000002: Other"],
                date=datetime(2024, 1, 2, 5, 0, tzinfo=timezone(timedelta(hours=2))),
            ),
        ]

        self.updater.handle_commits(self.repository, commits, Branch(name="master"))

        written = self._written()
        self.assertEqual(len(written), 1)
        entries = written[0]
        self.assertEqual(len(entries), 2)
        self.assertEqual(
            entries[0],
            {
                "url": f"https://git.openjdk.org/jdk/commit/{commits[0].hash}",
                "version": "21",
                "build": "b07",
                "issue": ["8000001"],
                "user": "Duke",
                "date": "2024-01-02T03:04:05+00:00",
            },
        )
        self.assertEqual(entries[1]["date"], "2024-01-02T05:00:00+02:00")

    def test_file_named_after_repository(self):
        self.updater.handle_commits(self.repository, [create_test_commit("c1")], Branch(name="master"))

        names = [f.name for f in self.folder.glob("*.json")]
        self.assertEqual(len(names), 1)
        self.assertTrue(names[0].startswith("openjdk.jdk."))
        self.assertEqual(list(self.folder.glob("*.tmp")), [])

    def test_consecutive_batches_do_not_overwrite(self):
        self.updater.handle_commits(self.repository, [create_test_commit("c1")], Branch(name="master"))
        self.updater.handle_commits(self.repository, [create_test_commit("c2")], Branch(name="master"))
        self.assertEqual(len(self._written()), 2)

    def test_tag_uses_tag_build(self):
        self.updater.handle_tag_commits(self.repository, [create_test_commit("c1")], Tag(name="jdk-21+5"))
        self.assertEqual(self._written()[0][0]["build"], "b05")

    def test_tag_without_build_number_is_ignored(self):
        self.updater.handle_tag_commits(self.repository, [create_test_commit("c1")], Tag(name="jdk-21-ga"))
        self.assertFalse(self.folder.exists())

    def test_new_branch_is_ignored(self):
        self.updater.handle_new_branch(
            self.repository, [create_test_commit("c1")], Branch(name="master"), Branch(name="b")
        )
        self.assertFalse(self.folder.exists())


if __name__ == "__main__":
    unittest.main()
