import uuid
from sqlalchemy import Column, Integer, Text, Boolean, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship, validates
from .base import Base

class Message(Base):
    __tablename__ = "messages"

    message_id = Column(Integer, primary_key=True, autoincrement=True)
    # Grouping key only; a new thread gets a fresh value from the default
    conversation_id = Column(Uuid(as_uuid=True), nullable=False, default=uuid.uuid4, index=True)
    sender_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.property_id", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, nullable=False, server_default=func.now())

    sender = relationship("User", foreign_keys=[sender_id], back_populates="sent_messages")
    receiver = relationship("User", foreign_keys=[receiver_id], back_populates="received_messages")
    property = relationship("Property", back_populates="messages")

    @validates("content")
    def _validate_content(self, _key, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("content must be a non-empty string")
        return value

    def other_participant(self, user_id: int) -> int:
        """Return the participant of this message who is not `user_id`."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id

    def __repr__(self):
        return f"<Message(message_id={self.message_id}, conversation_id='{self.conversation_id}')>"
