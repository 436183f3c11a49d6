"""
Mailman mailing-list transport.

Reads conversations from the list's public pipermail archive over HTTP and
posts new messages through SMTP. One MailmanServer is shared by every
pipeline of the process; posting is serialized and rate limited.

Required environment variables (.env file), only when the SMTP server
requires authentication:
    - SMTP_USER
    - SMTP_PASSWORD
"""

import logging
import os
import smtplib
import threading
import time
from datetime import date, datetime, timedelta, timezone
from email.message import EmailMessage
from email.utils import format_datetime

import requests

from mailinglist.archive_parser import build_conversations, parse_mbox
from models.config import EmailSettings
from models.mail import Conversation, Email, EmailAddress

logger = logging.getLogger(__name__)

DEFAULT_SMTP_PORT = 25


def months_between(start: date, end: date) -> list[date]:
    """First day of every month from `start` to `end`, inclusive."""
    months = []
    current = date(start.year, start.month, 1)
    while current <= end:
        months.append(current)
        if current.month == 12:
            current = date(current.year + 1, 1, 1)
        else:
            current = date(current.year, current.month + 1, 1)
    return months


def to_mime(email: Email) -> EmailMessage:
    """Render an Email as a MIME message ready for SMTP."""
    message = EmailMessage()
    message["Message-Id"] = email.id
    message["Date"] = format_datetime(email.date)
    message["Subject"] = email.subject
    message["From"] = str(email.author)
    message["Sender"] = str(email.sender)
    message["To"] = ", ".join(str(recipient) for recipient in email.recipients)
    if email.in_reply_to:
        message["In-Reply-To"] = email.in_reply_to
        message["References"] = " ".join(email.references or [email.in_reply_to])
    for name, value in email.headers.items():
        message[name] = value
    message.set_content(email.body)
    return message


class MailmanServer:
    """Shared connection settings for a Mailman installation."""

    def __init__(
        self,
        archive_url: str,
        smtp: str,
        interval: timedelta = timedelta(seconds=1),
        smtp_user: str | None = None,
        smtp_password: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.archive_url = archive_url.rstrip("/")
        host, _, port = smtp.partition(":")
        self.smtp_host = host
        self.smtp_port = int(port) if port else DEFAULT_SMTP_PORT
        self.interval = interval
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.session = session or requests.Session()
        self._lock = threading.Lock()
        self._last_post: float | None = None

    @classmethod
    def from_settings(cls, settings: EmailSettings) -> "MailmanServer":
        return cls(
            settings.archive,
            settings.smtp,
            settings.interval,
            smtp_user=os.getenv("SMTP_USER"),
            smtp_password=os.getenv("SMTP_PASSWORD"),
        )

    def get_list(self, recipient: str) -> "MailmanList":
        name = EmailAddress.parse(recipient).local_part
        return MailmanList(self, name)

    def fetch_month(self, list_name: str, month: date) -> str:
        """Download one monthly archive; months without traffic are empty."""
        url = f"{self.archive_url}/{list_name}/{month.strftime('%Y-%B')}.txt"
        response = self.session.get(url, timeout=30)
        if response.status_code == 404:
            return ""
        response.raise_for_status()
        return response.text

    def send(self, message: EmailMessage) -> None:
        with self._lock:
            if self._last_post is not None:
                wait = self.interval.total_seconds() - (time.monotonic() - self._last_post)
                if wait > 0:
                    time.sleep(wait)

            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                if self.smtp_user and self.smtp_password:
                    server.starttls()
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(message)
            self._last_post = time.monotonic()

        logger.info("Sent %s to %s", message["Message-Id"], message["To"])


class MailmanList:
    """One mailing list on a MailmanServer."""

    def __init__(self, server: MailmanServer, name: str) -> None:
        self.server = server
        self.name = name

    def __repr__(self) -> str:
        return f"MailmanList({self.name})"

    def conversations(self, max_age: timedelta) -> list[Conversation]:
        now = datetime.now(timezone.utc)
        cutoff = now - max_age

        emails: list[Email] = []
        for month in months_between(cutoff.date(), now.date()):
            emails.extend(parse_mbox(self.server.fetch_month(self.name, month)))

        recent = [email for email in emails if email.date >= cutoff]
        return build_conversations(recent)

    def post(self, email: Email) -> None:
        self.server.send(to_mime(email))
