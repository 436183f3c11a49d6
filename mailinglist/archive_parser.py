"""
Parsing of Mailman (pipermail) mbox archives into threaded conversations.

Pipermail text archives are plain mbox files with obfuscated sender
addresses ("duke at openjdk.org (Duke)"), so the From header is normalized
before it becomes an EmailAddress.
"""

import logging
import re
from email import policy
from email.message import EmailMessage
from email.parser import Parser

from models.mail import Conversation, Email, EmailAddress
from models.types import MessageID
from shared.errors import InvalidAddress
from shared.utils import parse_datetime

logger = logging.getLogger(__name__)

_MBOX_SEPARATOR = re.compile(r"^From \S.*$\n?", re.MULTILINE)
_OBFUSCATED_FROM = re.compile(r"^\s*(\S+) at (\S+?)\s*(?:\((.*)\))?\s*$")
_MESSAGE_ID = re.compile(r"<[^<>\s]+>")


def split_mbox(text: str) -> list[str]:
    """Split an mbox document into raw RFC 822 messages."""
    return [chunk for chunk in _MBOX_SEPARATOR.split(text) if chunk.strip()]


def parse_sender(value: str) -> EmailAddress:
    """Parse a From header, undoing pipermail's " at " obfuscation."""
    match = _OBFUSCATED_FROM.match(value)
    if match:
        local, domain, name = match.groups()
        return EmailAddress.from_parts(name, f"{local}@{domain}")
    return EmailAddress.parse(value)


def _message_ids(value: str | None) -> list[MessageID]:
    if not value:
        return []
    return [MessageID(m) for m in _MESSAGE_ID.findall(value)]


def _raw_header(message: EmailMessage, name: str) -> str:
    for key, value in message.raw_items():
        if key.lower() == name.lower():
            return " ".join(value.split())
    return ""


def _body(message: EmailMessage) -> str:
    if message.is_multipart():
        part = message.get_body(preferencelist=("plain",))
        return part.get_content() if part is not None else ""
    return message.get_content()


def parse_message(raw: str) -> Email | None:
    """Parse one archived message; returns None when it lacks the basics."""
    message = Parser(policy=policy.default).parsestr(raw)

    ids = _message_ids(message.get("Message-ID"))
    date = parse_datetime(message.get("Date"))
    if not ids or date is None:
        logger.debug("Skipping archived message without Message-ID or Date")
        return None

    try:
        sender = parse_sender(_raw_header(message, "From"))
    except InvalidAddress:
        logger.debug("Skipping archived message %s with unparseable sender", ids[0])
        return None

    in_reply_to = _message_ids(message.get("In-Reply-To"))
    return Email(
        id=ids[0],
        subject=" ".join(str(message.get("Subject", "")).split()),
        body=_body(message),
        sender=sender,
        author=sender,
        date=date,
        in_reply_to=in_reply_to[0] if in_reply_to else None,
        references=_message_ids(message.get("References")),
    )


def parse_mbox(text: str) -> list[Email]:
    emails = []
    for raw in split_mbox(text):
        email = parse_message(raw)
        if email is not None:
            emails.append(email)
    return emails


def _parent_id(email: Email, known: dict[str, Email]) -> str | None:
    if email.in_reply_to and email.in_reply_to in known:
        return email.in_reply_to
    for ref in reversed(email.references):
        if ref in known:
            return ref
    return None


def build_conversations(emails: list[Email]) -> list[Conversation]:
    """
    Group emails into threads.

    A message whose parent is not among `emails` starts its own thread.
    Threads and replies are ordered by date.
    """
    known = {email.id: email for email in emails}
    ordered = sorted(emails, key=lambda e: e.date)

    roots: dict[str, str] = {}
    for email in ordered:
        if email.id in roots:
            continue
        path = [email.id]
        parent = _parent_id(email, known)
        while parent is not None and parent not in roots and parent not in path:
            path.append(parent)
            parent = _parent_id(known[parent], known)
        root = roots[parent] if parent in roots else path[-1]
        for member in path:
            roots[member] = root

    threads: dict[str, list[Email]] = {}
    for email in ordered:
        threads.setdefault(roots[email.id], []).append(email)

    conversations = []
    for root_id, members in threads.items():
        replies = [email for email in members if email.id != root_id]
        conversations.append(Conversation(first=known[root_id], replies=replies))
    conversations.sort(key=lambda c: c.first.date)
    return conversations
