"""Lead repository - Database operations for prize wheel leads"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Lead


class LeadRepository:
    """Repository for lead database operations"""

    @staticmethod
    def find_existing(db: Session, email: Optional[str], whatsapp: Optional[str]) -> Optional[Lead]:
        """First lead sharing the email or the WhatsApp number"""
        filters = []
        if email:
            filters.append(Lead.email == email)
        if whatsapp:
            filters.append(Lead.whatsapp == whatsapp)
        if not filters:
            return None
        return db.query(Lead).filter(or_(*filters)).first()

    @staticmethod
    def create_lead(db: Session, **lead_data) -> Lead:
        lead = Lead(**lead_data)
        db.add(lead)
        db.commit()
        db.refresh(lead)
        return lead
