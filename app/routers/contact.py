from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.crud import contact_messages as contact_crud
from app.schemas.common import MessageResponse
from app.schemas.contact import ContactMessageCreate


router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=MessageResponse)
def send_contact_message(
    contact: ContactMessageCreate,
    db: Session = Depends(get_db)
):
    """Public contact form; no account needed"""
    contact_crud.create_contact_message(
        db,
        name=contact.name,
        email=contact.email,
        message=contact.message,
    )
    return {"message": "Message sent successfully"}
