"""
Guest model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey

from app.core.db import Base

class Guest(Base):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=False, default="")
    status = Column(String(20), nullable=False, default="invited")  # invited, confirmed, declined, checked_in
    type = Column(String(20), nullable=False, default="regular")  # regular, vip, family
    # Plain pointer: cards.guest_id already carries the FK in the other direction
    card_id = Column(Integer, nullable=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
