import pytest
from content.contact.inbox import DeleteContactMessage, SendContactMessage, UpdateContactStatus
from content.contact.message import ContactMessage
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _send(**overrides):
    values = {
        "name": "Amina B.",
        "phone": "0555123456",
        "email": "amina@example.dz",
        "message": "Proposez-vous des retouches ?",
    }
    values.update(overrides)
    return current_domain.process(SendContactMessage(**values), asynchronous=False)


def _get(message_id):
    return current_domain.repository_for(ContactMessage).get(message_id)


class TestSendContactMessage:
    def test_persists_message(self):
        msg = _get(_send(subject="Retouche"))

        assert msg.name == "Amina B."
        assert msg.subject == "Retouche"
        assert msg.status == "unread"

    def test_invalid_phone_is_not_stored(self):
        with pytest.raises(ValidationError):
            _send(phone="05 55")

        assert current_domain.repository_for(ContactMessage)._dao.query.all().items == []


class TestUpdateContactStatus:
    def test_marks_read(self):
        message_id = _send()

        current_domain.process(UpdateContactStatus(message_id=message_id, status="read"), asynchronous=False)

        assert _get(message_id).status == "read"

    def test_invalid_status(self):
        message_id = _send()

        with pytest.raises(ValidationError):
            current_domain.process(UpdateContactStatus(message_id=message_id, status="spam"), asynchronous=False)

    def test_unknown_message(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateContactStatus(message_id="ghost", status="read"), asynchronous=False)


def test_delete_message():
    message_id = _send()

    current_domain.process(DeleteContactMessage(message_id=message_id), asynchronous=False)

    with pytest.raises(ObjectNotFoundError):
        _get(message_id)
