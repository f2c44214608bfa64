from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.site_settings import SiteSettings, SETTINGS_ID


def get_site_settings(db: Session) -> SiteSettings:
    """Return the singleton settings row, creating it with defaults on first read."""
    settings = db.query(SiteSettings).filter(SiteSettings.id == SETTINGS_ID).first()
    if settings:
        return settings

    settings = SiteSettings(id=SETTINGS_ID)
    db.add(settings)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the row first
        db.rollback()
        return db.query(SiteSettings).filter(SiteSettings.id == SETTINGS_ID).one()

    db.refresh(settings)
    return settings


def update_site_settings(db: Session, updates: Dict[str, Any]) -> SiteSettings:
    settings = get_site_settings(db)
    for field, value in updates.items():
        setattr(settings, field, value)
    db.commit()
    db.refresh(settings)
    return settings
