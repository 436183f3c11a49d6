"""Unit tests for Pydantic models."""

import unittest
from datetime import timedelta

from pydantic import ValidationError

from models import Email, EmailAddress, EmailSettings, NotifyConfig, RepositorySettings, Tag
from shared.errors import InvalidAddress
from tests.fixtures.commit_factory import create_test_commit, create_test_email


class TestEmailAddress(unittest.TestCase):
    """Tests for EmailAddress.parse()."""

    def test_parses_name_and_address(self):
        address = EmailAddress.parse("Duke <duke@openjdk.org>")

        self.assertEqual(address.name, "Duke")
        self.assertEqual(address.address, "duke@openjdk.org")
        self.assertEqual(address.domain, "openjdk.org")
        self.assertEqual(address.local_part, "duke")

    def test_parses_bare_address(self):
        address = EmailAddress.parse("jdk-dev@openjdk.org")

        self.assertIsNone(address.name)
        self.assertEqual(str(address), "jdk-dev@openjdk.org")

    def test_renders_with_name(self):
        self.assertEqual(str(EmailAddress.parse("Duke <duke@openjdk.org>")), "Duke <duke@openjdk.org>")

    def test_rejects_malformed(self):
        for text in ["", "   ", "duke", "duke@", "@openjdk.org", "not an address"]:
            with self.subTest(text=text):
                with self.assertRaises(InvalidAddress):
                    EmailAddress.parse(text)

    def test_invalid_address_is_value_error(self):
        with self.assertRaises(ValueError):
            EmailAddress.parse("nope")


class TestEmail(unittest.TestCase):
    def test_reply_threads_under_parent(self):
        parent = create_test_email(message_id="<root@openjdk.org>")
        sender = EmailAddress.parse("bot@openjdk.org")

        reply = Email.reply(
            parent,
            "Re: [Integrated] " + parent.subject,
            "body",
            sender=sender,
            author=sender,
            recipient=EmailAddress.parse("list@openjdk.org"),
            headers={"X-Test": "1"},
        )

        self.assertEqual(reply.in_reply_to, "<root@openjdk.org>")
        self.assertEqual(reply.references, ["<root@openjdk.org>"])
        self.assertEqual(reply.headers, {"X-Test": "1"})
        self.assertNotEqual(reply.id, parent.id)

    def test_create_starts_new_thread(self):
        sender = EmailAddress.parse("bot@openjdk.org")
        email = Email.create(
            "subject", "body", sender=sender, author=sender, recipient=sender
        )
        self.assertIsNone(email.in_reply_to)
        self.assertTrue(email.id.endswith("@openjdk.org>"))


class TestVcsModels(unittest.TestCase):
    def test_abbreviated_hash(self):
        commit = create_test_commit("c1")
        self.assertEqual(len(commit.abbreviated_hash), 8)
        self.assertTrue(commit.hash.startswith(commit.abbreviated_hash))

    def test_tag_display_name_prefers_label(self):
        self.assertEqual(Tag(name="refs/tags/x", label="jdk-21+5").display_name, "jdk-21+5")
        self.assertEqual(Tag(name="jdk-21+5").display_name, "jdk-21+5")

    def test_tag_build_number(self):
        self.assertEqual(Tag(name="jdk-21+5").build_number, 5)
        self.assertEqual(Tag(name="jdk-21+35").build_number, 35)
        self.assertIsNone(Tag(name="jdk-21-ga").build_number)

    def test_commit_is_frozen(self):
        commit = create_test_commit("c1")
        with self.assertRaises(ValidationError):
            commit.hash = "other"


class TestConfigModels(unittest.TestCase):
    def test_repository_defaults(self):
        settings = RepositorySettings()

        self.assertEqual(settings.branches, "^master$")
        self.assertFalse(settings.branchnames)
        self.assertIsNone(settings.json_status)
        self.assertEqual(settings.mailinglists, [])

    def test_json_target_read_from_json_key(self):
        settings = RepositorySettings.model_validate(
            {"json": {"folder": "/tmp/status", "version": "21", "build": "b01"}}
        )
        self.assertEqual(settings.json_status.version, "21")

    def test_interval_defaults_to_one_second(self):
        settings = EmailSettings(smtp="mail", sender="bot@openjdk.org", archive="https://mail")
        self.assertEqual(settings.interval, timedelta(seconds=1))

    def test_interval_accepts_iso_duration(self):
        settings = EmailSettings(
            smtp="mail", sender="bot@openjdk.org", archive="https://mail", interval="PT5S"
        )
        self.assertEqual(settings.interval, timedelta(seconds=5))

    def test_repositories_must_be_mapping(self):
        with self.assertRaises(ValidationError):
            NotifyConfig.model_validate({"repositories": ["openjdk/jdk"]})


if __name__ == "__main__":
    unittest.main()
