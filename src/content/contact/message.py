"""ContactMessage aggregate root — a note left through the contact form."""

import re
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from content.domain import content

DEFAULT_SUBJECT = "No subject provided"

_DIGITS = re.compile(r"^\d+$")


class ContactStatus(Enum):
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"


# The dashboard can only mark a message read or archive it
SETTABLE_STATUSES = (ContactStatus.READ, ContactStatus.ARCHIVED)


@content.aggregate
class ContactMessage:
    name: String(required=True, max_length=100)
    phone: String(required=True, max_length=30)
    email: String(required=True, max_length=254)
    subject: String(max_length=200, default=DEFAULT_SUBJECT)
    message: Text(required=True)
    status: String(choices=ContactStatus, default=ContactStatus.UNREAD.value)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def receive(cls, name, phone, email, message, subject=None):
        from content.contact.events import ContactMessageReceived

        values = {
            "name": (name or "").strip(),
            "phone": (phone or "").strip(),
            "email": (email or "").strip().lower(),
            "message": (message or "").strip(),
        }
        if not all(values.values()):
            raise ValidationError({"contact": ["Name, phone, email, and message are required"]})
        if not _DIGITS.match(values["phone"]):
            raise ValidationError({"phone": ["Phone number should contain only digits"]})

        now = datetime.now()
        msg = cls(
            **values,
            subject=(subject or "").strip() or DEFAULT_SUBJECT,
            created_at=now,
            updated_at=now,
        )
        msg.raise_(ContactMessageReceived(message_id=msg.id, email=msg.email, subject=msg.subject, received_at=now))
        return msg

    def mark(self, status):
        """Move to ``read`` or ``archived``; ``unread`` cannot be set back."""
        try:
            target = ContactStatus(status)
        except ValueError:
            target = None
        if target not in SETTABLE_STATUSES:
            raise ValidationError({"status": ["Invalid status value"]})
        self.status = target.value
        self.updated_at = datetime.now()
