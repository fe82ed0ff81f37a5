"""Contact inbox — messages sent from the shop and triaged on the dashboard."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from content.contact.message import ContactMessage
from content.domain import content
from shared.logging import get_logger

logger = get_logger(__name__)


@content.command(part_of="ContactMessage")
class SendContactMessage:
    name: String(max_length=100)
    phone: String(max_length=30)
    email: String(max_length=254)
    subject: String(max_length=200)
    message: Text()


@content.command(part_of="ContactMessage")
class UpdateContactStatus:
    message_id: Identifier(required=True)
    status: String(max_length=20)


@content.command(part_of="ContactMessage")
class DeleteContactMessage:
    message_id: Identifier(required=True)


@content.command_handler(part_of=ContactMessage)
class InboxHandler:
    @handle(SendContactMessage)
    def send(self, command):
        msg = ContactMessage.receive(
            name=command.name,
            phone=command.phone,
            email=command.email,
            subject=command.subject,
            message=command.message,
        )
        current_domain.repository_for(ContactMessage).add(msg)
        logger.info("contact_message_received", message_id=str(msg.id), subject=msg.subject)
        return str(msg.id)

    @handle(UpdateContactStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(ContactMessage)
        msg = repo.get(command.message_id)
        msg.mark(command.status)
        repo.add(msg)

    @handle(DeleteContactMessage)
    def delete(self, command):
        repo = current_domain.repository_for(ContactMessage)
        repo._dao.delete(repo.get(command.message_id))
