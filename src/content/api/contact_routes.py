"""FastAPI routes for the contact inbox.

Messages are addressed with an ``id`` query parameter, the way the dashboard
table calls them.
"""

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from content.api.schemas import ContactResponse, SendContactRequest, UpdateContactStatusRequest
from content.contact.inbox import DeleteContactMessage, SendContactMessage, UpdateContactStatus
from content.contact.message import ContactMessage
from shared.schemas import StatusResponse

contact_router = APIRouter(prefix="/api/contact", tags=["contact"])


def _message_or_404(message_id):
    try:
        return current_domain.repository_for(ContactMessage).get(message_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Contact not found")


def _require_id(message_id):
    if not message_id:
        raise HTTPException(status_code=400, detail="Contact ID is required")


@contact_router.get("", response_model=ContactResponse | list[ContactResponse])
async def list_messages(id: str | None = None):
    """Every message, newest first, or a single one with ``id``."""
    if id:
        return ContactResponse.from_message(_message_or_404(id))

    messages = current_domain.repository_for(ContactMessage)._dao.query.all().items
    messages.sort(key=lambda m: m.created_at, reverse=True)
    return [ContactResponse.from_message(m) for m in messages]


@contact_router.post("", status_code=201, response_model=ContactResponse)
async def send_message(body: SendContactRequest) -> ContactResponse:
    message_id = current_domain.process(
        SendContactMessage(
            name=body.name,
            phone=body.phone,
            email=body.email,
            subject=body.subject,
            message=body.message,
        ),
        asynchronous=False,
    )
    return ContactResponse.from_message(current_domain.repository_for(ContactMessage).get(message_id))


@contact_router.put("", response_model=ContactResponse)
async def update_status(body: UpdateContactStatusRequest, id: str | None = None) -> ContactResponse:
    _require_id(id)
    _message_or_404(id)
    current_domain.process(UpdateContactStatus(message_id=id, status=body.status), asynchronous=False)
    return ContactResponse.from_message(current_domain.repository_for(ContactMessage).get(id))


@contact_router.delete("", response_model=StatusResponse)
async def delete_message(id: str | None = None) -> StatusResponse:
    _require_id(id)
    _message_or_404(id)
    current_domain.process(DeleteContactMessage(message_id=id), asynchronous=False)
    return StatusResponse(message="Contact deleted successfully")
