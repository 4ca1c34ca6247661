from sqlalchemy import Column, Integer, Float, Text, String, Boolean, TIMESTAMP, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .base import Base


class Property(Base):
    __tablename__ = "properties"

    property_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    property_name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(Text)
    property_type = Column(String(100))
    bedrooms = Column(Integer)
    bathrooms = Column(Integer)
    max_guests = Column(Integer)
    is_broker_listing = Column(Boolean, default=False)
    status = Column(String(20), nullable=False, default="available")
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("status IN ('available', 'rented', 'maintenance')", name="check_property_status"),
    )

    owner = relationship("User", back_populates="properties")
    messages = relationship("Message", back_populates="property")

    def summary(self) -> dict:
        return {
            "property_id": self.property_id,
            "property_name": self.property_name,
            "price": self.price,
        }
