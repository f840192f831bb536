import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from dealership.core.database import Base
from dealership.models.enums import CarStatus, FuelType


class Car(Base):
    __tablename__ = "cars"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    brand = Column(String(80), nullable=False, index=True)
    model = Column(String(120), nullable=False)
    year = Column(Integer, nullable=True)
    price = Column(Integer, nullable=False)  # smallest currency unit
    fuel_type = Column(String(20), default=FuelType.petrol.value, nullable=False)
    km_driven = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default=CarStatus.available.value, nullable=False, index=True)
    is_featured = Column(Boolean, default=False, nullable=False)
    description = Column(Text, nullable=True)
    contact_phone = Column(String(32), nullable=True)
    contact_whatsapp = Column(String(32), nullable=True)
    sold_at = Column(DateTime, nullable=True)  # set while status == sold; drives cleanup
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("User", back_populates="cars")
    images = relationship(
        "CarImage",
        back_populates="car",
        cascade="all, delete-orphan",
        order_by="CarImage.display_order",
    )
