"""Owner-submitted "sell your car" requests, worked by admins from the dashboard."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID

from dealership.core.database import Base
from dealership.models.enums import InquiryStatus


class SellInquiry(Base):
    __tablename__ = "sell_inquiries"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_name = Column(String(120), nullable=False)
    phone = Column(String(32), nullable=False)
    whatsapp = Column(String(32), nullable=True)
    brand = Column(String(80), nullable=False)
    model = Column(String(120), nullable=False)
    year = Column(Integer, nullable=True)
    km_driven = Column(Integer, nullable=True)
    fuel_type = Column(String(20), nullable=True)
    transmission = Column(String(20), nullable=True)
    expected_price = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    status = Column(String(20), default=InquiryStatus.pending.value, nullable=False, index=True)
    admin_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
