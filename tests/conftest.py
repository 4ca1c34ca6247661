"""
Test configuration for the messaging API.

Binds the session factory to an in-memory SQLite engine, recreates the schema
for every test, and seeds one account per role plus listing 10.
"""

import os
from datetime import timedelta
from typing import Callable, Dict

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest

import db as db_module
from auth.token import create_user_token
from models import Base, Message, Property, User, UserRole

from helpers import (
    ADMIN_ID, BASE_TIME, BROKER_ID, LISTING_ID, OWNER_ID, STRANGER_ID, TENANT_ID,
)


@pytest.fixture
def engine():
    engine = db_module.init_db("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    db_module.dispose_db()


@pytest.fixture
def db_session(engine):
    with db_module.SessionLocal() as session:
        yield session


@pytest.fixture
def users(db_session) -> Dict[str, User]:
    rows = {
        "tenant": User(user_id=TENANT_ID, name="Alice Tenant", email="alice@example.com",
                       password_hash="x", role=UserRole.TENANT.value),
        "owner": User(user_id=OWNER_ID, name="Bob Owner", email="bob@example.com",
                      password_hash="x", role=UserRole.PROPERTY_OWNER.value),
        "broker": User(user_id=BROKER_ID, name="Carol Broker", email="carol@example.com",
                       password_hash="x", role=UserRole.BROKER.value),
        "admin": User(user_id=ADMIN_ID, name="Dan Admin", email="dan@example.com",
                      password_hash="x", role=UserRole.ADMIN.value),
        "stranger": User(user_id=STRANGER_ID, name="Eve Stranger", email="eve@example.com",
                         password_hash="x", role=UserRole.TENANT.value),
    }
    db_session.add_all(rows.values())
    db_session.commit()
    return rows


@pytest.fixture
def listing(db_session, users) -> Property:
    prop = Property(
        property_id=LISTING_ID,
        user_id=OWNER_ID,
        property_name="Sunny Loft",
        price=1200.0,
        property_type="apartment",
        bedrooms=1,
    )
    db_session.add(prop)
    db_session.commit()
    return prop


@pytest.fixture
def make_message(db_session, listing) -> Callable[..., Message]:
    """Insert a message directly, optionally pinning its conversation and timestamp."""

    def _make(sender_id, receiver_id, content, conversation_id=None,
              minutes=None, is_read=False, property_id=LISTING_ID) -> Message:
        msg = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            property_id=property_id,
            content=content,
            is_read=is_read,
        )
        if conversation_id is not None:
            msg.conversation_id = conversation_id
        if minutes is not None:
            msg.created_at = BASE_TIME + timedelta(minutes=minutes)
        db_session.add(msg)
        db_session.commit()
        db_session.refresh(msg)
        return msg

    return _make


@pytest.fixture
def token_for(users) -> Callable[[str], str]:
    def _token(role_key: str) -> str:
        return create_user_token(users[role_key])
    return _token

