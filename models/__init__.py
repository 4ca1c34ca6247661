### models/__init__.py
from .base import Base
from .user import User, UserRole, DEFAULT_PICTURE_URL
from .property import Property
from .message import Message
