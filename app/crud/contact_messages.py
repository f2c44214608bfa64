from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.contact_message import ContactMessage


def create_contact_message(db: Session, name: str, email: str, message: str) -> ContactMessage:
    contact_message = ContactMessage(name=name, email=email, message=message, is_read=False)
    db.add(contact_message)
    db.commit()
    db.refresh(contact_message)
    return contact_message


def list_contact_messages(db: Session, is_read: Optional[bool] = None) -> List[ContactMessage]:
    query = db.query(ContactMessage)
    if is_read is not None:
        query = query.filter(ContactMessage.is_read.is_(is_read))
    return query.order_by(ContactMessage.created_at.desc(), ContactMessage.id).all()


def mark_message_as_read(db: Session, message_id: str) -> bool:
    """Mark a message as read. Returns False only if the message does not exist."""
    contact_message = db.query(ContactMessage).filter(ContactMessage.id == message_id).first()
    if not contact_message:
        return False
    if not contact_message.is_read:
        contact_message.is_read = True
        db.commit()
    return True
