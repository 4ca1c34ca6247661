from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
import enum

from .base import Base

DEFAULT_PICTURE_URL = (
    "https://res.cloudinary.com/rahul4019/image/upload/w_1000,c_fill,ar_1:1,g_auto,"
    "r_max,bo_5px_solid_red,b_rgb:262c35/v1695133265/pngwing.com_zi4cre.png"
)

class UserRole(enum.IntEnum):
    TENANT = 1
    PROPERTY_OWNER = 2
    BROKER = 3
    ADMIN = 4

class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    picture = Column(String(255), default=DEFAULT_PICTURE_URL)
    phone = Column(String(20))
    role = Column(Integer, nullable=False, default=UserRole.TENANT.value)

    properties = relationship("Property", back_populates="owner")
    sent_messages = relationship("Message", foreign_keys="Message.sender_id", back_populates="sender")
    received_messages = relationship("Message", foreign_keys="Message.receiver_id", back_populates="receiver")

    def public_profile(self) -> dict:
        """Fields safe to show to the other side of a conversation."""
        return {
            "user_id": self.user_id,
            "name": self.name,
            "picture": self.picture,
        }
