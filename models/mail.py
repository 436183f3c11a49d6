"""Pydantic models for mailing-list data: addresses, emails and conversations."""

from datetime import datetime, timezone
from email.utils import formataddr, make_msgid, parseaddr

from pydantic import BaseModel, ConfigDict, Field

from models.types import HeaderMap, MessageID
from shared.errors import InvalidAddress


class EmailAddress(BaseModel):
    """An email address with an optional display name."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    address: str

    @classmethod
    def parse(cls, text: str) -> "EmailAddress":
        """
        Parse "Name <user@domain>" or "user@domain".

        Raises:
            InvalidAddress: if the text does not hold exactly one well-formed address
        """
        if not text or not text.strip():
            raise InvalidAddress("Empty email address")

        name, address = parseaddr(text.strip())
        local, at, domain = address.partition("@")
        if not at or not local or not domain or "@" in domain:
            raise InvalidAddress(f"Malformed email address: {text!r}")
        if any(ch.isspace() for ch in address):
            raise InvalidAddress(f"Malformed email address: {text!r}")

        return cls(name=name or None, address=address)

    @classmethod
    def from_parts(cls, name: str | None, address: str) -> "EmailAddress":
        """Build an address from already separated parts, without validation."""
        return cls(name=name or None, address=address)

    @property
    def local_part(self) -> str:
        return self.address.partition("@")[0]

    @property
    def domain(self) -> str:
        return self.address.partition("@")[2]

    def __str__(self) -> str:
        if self.name:
            return formataddr((self.name, self.address))
        return self.address


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Email(BaseModel):
    """A single mailing-list message, incoming or outgoing."""

    model_config = ConfigDict(frozen=True)

    id: MessageID
    subject: str
    body: str
    sender: EmailAddress
    author: EmailAddress
    recipients: list[EmailAddress] = Field(default_factory=list)
    headers: HeaderMap = Field(default_factory=dict)
    date: datetime = Field(default_factory=_now)
    in_reply_to: MessageID | None = None
    references: list[MessageID] = Field(default_factory=list)

    @classmethod
    def create(
        cls,
        subject: str,
        body: str,
        *,
        sender: EmailAddress,
        author: EmailAddress,
        recipient: EmailAddress,
        headers: HeaderMap | None = None,
    ) -> "Email":
        """Build the first message of a new thread."""
        return cls(
            id=MessageID(make_msgid(domain=sender.domain)),
            subject=subject,
            body=body,
            sender=sender,
            author=author,
            recipients=[recipient],
            headers=dict(headers or {}),
        )

    @classmethod
    def reply(
        cls,
        parent: "Email",
        subject: str,
        body: str,
        *,
        sender: EmailAddress,
        author: EmailAddress,
        recipient: EmailAddress,
        headers: HeaderMap | None = None,
    ) -> "Email":
        """Build a reply that threads under `parent`."""
        return cls(
            id=MessageID(make_msgid(domain=sender.domain)),
            subject=subject,
            body=body,
            sender=sender,
            author=author,
            recipients=[recipient],
            headers=dict(headers or {}),
            in_reply_to=parent.id,
            references=[*parent.references, parent.id],
        )


class Conversation(BaseModel):
    """An email thread; `first` is the thread root."""

    model_config = ConfigDict(frozen=True)

    first: Email
    replies: list[Email] = Field(default_factory=list)

    def all_messages(self) -> list[Email]:
        return [self.first, *self.replies]
