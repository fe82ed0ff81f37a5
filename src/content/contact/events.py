from protean.fields import DateTime, Identifier, String

from content.domain import content


@content.event(part_of="ContactMessage")
class ContactMessageReceived:
    """A visitor sent a message through the contact form."""

    __version__ = 1

    message_id: Identifier(required=True)
    email: String(required=True)
    subject: String(required=True)
    received_at: DateTime(required=True)
